"""Line-editor widgets for httm.

A widget is a named zero-argument callback returning an integer status,
dispatched by the host line editor when its key sequence is pressed.
Two widgets are provided:

- httm-lookup-widget: browse snapshots interactively (httm -i -R). The
  tool owns the terminal until it exits.
- httm-select-widget: select files on snapshots (httm -s -R) and append
  the selection to the command line at the cursor.

Both widgets request exactly one prompt redraw and report the external
tool's exit status as their own.
"""

import io
import logging
from typing import Callable, Protocol

from httm_keys.executor import run_httm

logger = logging.getLogger(__name__)

LOOKUP_WIDGET = "httm-lookup-widget"
SELECT_WIDGET = "httm-select-widget"

LOOKUP_FLAGS = ("-i", "-R")  # interactive browse, recursive
SELECT_FLAGS = ("-s", "-R")  # interactive select, recursive

Widget = Callable[[], int]


class UnknownWidgetError(KeyError):
    """Raised when dispatching a widget name that was never registered."""


class LineEditor(Protocol):
    """What a widget needs from the host line editor."""

    def append_to_lbuffer(self, text: str) -> None:
        """Append text to the buffer left of the cursor."""
        ...

    def reset_prompt(self) -> None:
        """Request a redraw of the prompt and edit buffer."""
        ...


class WidgetRegistry:
    """Name -> widget table the host line editor dispatches through."""

    def __init__(self) -> None:
        self._widgets: dict[str, Widget] = {}

    def register(self, name: str, widget: Widget) -> None:
        if name in self._widgets:
            logger.debug("Replacing widget %s", name)
        self._widgets[name] = widget

    def dispatch(self, name: str) -> int:
        """Invoke a widget by name and return its status.

        Raises:
            UnknownWidgetError: If no widget is registered under name.
        """
        try:
            widget = self._widgets[name]
        except KeyError:
            raise UnknownWidgetError(name) from None
        status = widget()
        logger.debug("Widget %s returned %d", name, status)
        return status

    def names(self) -> list[str]:
        return sorted(self._widgets)

    def __contains__(self, name: object) -> bool:
        return name in self._widgets


def join_selected_lines(output: str) -> str:
    """Join captured output lines with their terminators removed.

    Lines are concatenated with no separator, so "/path/a\\n/path/b\\n"
    becomes "/path/a/path/b". A final line without a terminator is kept.
    """
    pieces = []
    for line in io.StringIO(output, newline="\n"):
        pieces.append(line.removesuffix("\n"))
    return "".join(pieces)


def httm_select() -> tuple[str, int]:
    """Run httm in select mode and capture the selection.

    Returns:
        Tuple of (joined selection text, httm exit code).
    """
    result = run_httm(SELECT_FLAGS, capture=True)
    return join_selected_lines(result.output), result.exit_code


def httm_lookup_widget(editor: LineEditor) -> int:
    """Browse snapshots interactively, then redraw the prompt."""
    print()
    result = run_httm(LOOKUP_FLAGS)

    editor.reset_prompt()
    return result.exit_code


def httm_select_widget(editor: LineEditor) -> int:
    """Select snapshot files and append them to the buffer at the cursor.

    An aborted selection produces no output, leaving the buffer as it
    was apart from the redraw.
    """
    text, status = httm_select()
    if text:
        editor.append_to_lbuffer(text)

    editor.reset_prompt()
    return status


def register_httm_widgets(registry: WidgetRegistry, editor: LineEditor) -> None:
    """Register both httm widgets bound to the given line editor."""
    registry.register(LOOKUP_WIDGET, lambda: httm_lookup_widget(editor))
    registry.register(SELECT_WIDGET, lambda: httm_select_widget(editor))
