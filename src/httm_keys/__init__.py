"""httm-keys: line-editor key bindings for the httm snapshot tool."""

__version__ = "0.1.0"
