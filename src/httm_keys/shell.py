"""Shell interaction module.

Handles the prompt loop for the httm-keys host shell. The prompt is a
prompt_toolkit PromptSession with the httm widgets bound (Alt+m to
browse snapshots, Alt+s to select snapshot files into the command line).
Command lines run through bash; bare cd is handled in-process so httm
sees the new working directory.
"""

import logging
import os
import shlex

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from httm_keys.bindings import PromptSessionEditor, build_key_bindings
from httm_keys.executor import execute_command
from httm_keys.widgets import WidgetRegistry, register_httm_widgets

logger = logging.getLogger(__name__)

HISTORY_FILE: str = os.path.expanduser("~/.httm_keys_history")

EXIT_SUCCESS = 0
EXIT_KEYBOARD_INTERRUPT = 130  # 128 + SIGINT


def get_prompt() -> str:
    """Return the shell prompt string."""
    return "httm-keys> "


def is_bare_cd(command: str) -> bool:
    """Check if command is a bare cd: "cd" optionally followed by one word.

    The word may be quoted ("cd 'my dir'"). Compound commands
    (cd /tmp && ls, cd; echo hi) and unbalanced quotes go through bash.
    """
    stripped = command.strip()
    if any(c in stripped for c in (";", "&", "|")):
        return False
    try:
        parts = shlex.split(stripped)
    except ValueError:
        return False
    return bool(parts) and parts[0] == "cd" and len(parts) <= 2


def resolve_cd(target: str, previous_dir: str | None) -> tuple[str | None, str | None]:
    """Resolve the target directory for a bare cd command.

    Returns:
        Tuple of (resolved_path, error_message).
        On success: (path, None). On failure: (None, error_string).
    """
    if not target or target == "~":
        resolved = os.path.expanduser("~")
    elif target == "-":
        if not previous_dir:
            return None, "cd: OLDPWD not set"
        resolved = previous_dir
    else:
        resolved = os.path.expanduser(target)

    resolved = os.path.realpath(resolved)

    if not os.path.isdir(resolved):
        return None, f"cd: {target or '~'}: No such file or directory"

    return resolved, None


def _handle_cd(command: str, previous_dir: str | None) -> tuple[int, str | None]:
    """Change directory in-process.

    Returns:
        Tuple of (exit_code, new_previous_dir).
    """
    parts = shlex.split(command)
    target = parts[1] if len(parts) > 1 else ""

    resolved, error = resolve_cd(target, previous_dir)
    if error:
        print(error)
        return 1, previous_dir

    # cd - prints the new directory (bash behavior)
    if target == "-":
        print(resolved)

    current = os.getcwd()
    try:
        os.chdir(resolved)
    except OSError as e:
        print(f"cd: {target or '~'}: {e.strerror}")
        logger.debug("chdir to %s failed: %s", resolved, e)
        return 1, previous_dir

    os.environ["OLDPWD"] = current
    os.environ["PWD"] = resolved
    return 0, current


def create_session() -> tuple[PromptSession, PromptSessionEditor]:
    """Build the prompt session with the httm widgets registered and bound."""
    session = PromptSession(history=FileHistory(HISTORY_FILE))
    editor = PromptSessionEditor(session)

    registry = WidgetRegistry()
    register_httm_widgets(registry, editor)
    session.key_bindings = build_key_bindings(registry, editor)

    return session, editor


def run_shell() -> int:
    """Run the interactive shell loop.

    Handles Ctrl+C (cancel input) and Ctrl+D (exit).

    Returns:
        Exit code (0 for normal exit).
    """
    session, editor = create_session()

    last_exit_code = EXIT_SUCCESS
    previous_dir = os.environ.get("OLDPWD")

    print("httm-keys: Alt+m browse snapshots, Alt+s select snapshot files.")
    print("Type 'exit' or press Ctrl+D to quit.\n")

    while True:
        try:
            command = session.prompt(get_prompt())

            if not command.strip():
                continue

            if command.strip() == "exit":
                break

            if is_bare_cd(command):
                last_exit_code, previous_dir = _handle_cd(command.strip(), previous_dir)
                continue

            last_exit_code = execute_command(command)
            logger.debug(
                "Command exited with %d (last widget status %d)",
                last_exit_code,
                editor.last_status,
            )

        except KeyboardInterrupt:
            # Ctrl+C: cancel current input, show new prompt
            last_exit_code = EXIT_KEYBOARD_INTERRUPT
            continue

        except EOFError:
            # Ctrl+D: exit the shell
            print()
            break

    return EXIT_SUCCESS
