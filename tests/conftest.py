"""Shared pytest fixtures for httm-keys tests.

For the recording editor and the stub httm helper, see tests/utils.py
which can be imported directly.
"""

import os

import pytest

from tests.utils import RecordingEditor


@pytest.fixture
def editor():
    """Fixture that provides a fresh recording line editor."""
    return RecordingEditor()


@pytest.fixture(autouse=True)
def clean_httm_keys_env(monkeypatch, mocker):
    """Remove HTTM_KEYS_* variables so tests see the defaults."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("HTTM_KEYS_")}
    mocker.patch.dict(os.environ, env, clear=True)
    yield
