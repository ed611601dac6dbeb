"""prompt_toolkit integration.

Adapts a PromptSession to the LineEditor protocol and binds registered
widgets to key sequences. Widgets run inside run_in_terminal: the prompt
is erased, the external tool gets the real terminal, and the prompt is
rendered again once the widget returns.
"""

import logging
from typing import Mapping

from prompt_toolkit import PromptSession
from prompt_toolkit.application import run_in_terminal
from prompt_toolkit.key_binding import KeyBindings

from httm_keys.config import get_lookup_key, get_select_key
from httm_keys.widgets import LOOKUP_WIDGET, SELECT_WIDGET, WidgetRegistry

logger = logging.getLogger(__name__)


class PromptSessionEditor:
    """LineEditor backed by a prompt_toolkit PromptSession.

    last_status holds the status of the most recently dispatched widget.
    """

    def __init__(self, session: PromptSession) -> None:
        self.session = session
        self.last_status = 0

    def append_to_lbuffer(self, text: str) -> None:
        # insert_text inserts at the cursor and leaves the cursor after it
        self.session.default_buffer.insert_text(text)

    def reset_prompt(self) -> None:
        self.session.app.invalidate()


def default_keymap() -> dict[str, tuple[str, ...]]:
    """Widget name -> key sequence, from configuration."""
    return {
        LOOKUP_WIDGET: get_lookup_key(),
        SELECT_WIDGET: get_select_key(),
    }


def build_key_bindings(
    registry: WidgetRegistry,
    editor: PromptSessionEditor,
    keymap: Mapping[str, tuple[str, ...]] | None = None,
) -> KeyBindings:
    """Bind each widget in keymap to its key sequence.

    Args:
        registry: Registry holding the widgets.
        editor: Editor that records the last widget status.
        keymap: Widget name -> key sequence. Defaults to default_keymap().

    Returns:
        KeyBindings to pass to the PromptSession.
    """
    if keymap is None:
        keymap = default_keymap()

    bindings = KeyBindings()

    for name, keys in keymap.items():
        if name not in registry:
            logger.warning("No widget registered as %s, skipping binding", name)
            continue
        bindings.add(*keys)(_make_handler(registry, editor, name))
        logger.debug("Bound %s to %s", name, " ".join(keys))

    return bindings


def _make_handler(registry: WidgetRegistry, editor: PromptSessionEditor, name: str):
    def dispatch() -> None:
        editor.last_status = registry.dispatch(name)

    def handler(event) -> None:
        run_in_terminal(dispatch)

    return handler
