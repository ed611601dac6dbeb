"""Command execution module.

Runs the httm binary and host-shell command lines via subprocess.
Preserves exit codes for shell compatibility.

httm runs in the current working directory and always keeps the real
terminal on stdin and stderr, so its interactive UI works even when
stdout is captured.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Sequence

from httm_keys.config import get_httm_path

logger = logging.getLogger(__name__)

# Shell conventions for launch failures
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127


@dataclass(frozen=True)
class ProcessResult:
    """Result of one external-process run.

    output is the captured stdout text, empty when output was passed
    through to the terminal.
    """

    output: str
    exit_code: int


def shell_status(returncode: int) -> int:
    """Convert a subprocess returncode to a shell exit status.

    subprocess reports death by signal N as -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_httm(flags: Sequence[str], capture: bool = False) -> ProcessResult:
    """Run the configured httm binary with the given flags.

    Args:
        flags: Command-line flags, e.g. ("-i", "-R").
        capture: If True, capture stdout as text. Otherwise stdout is
            inherited and the tool writes straight to the terminal.

    Returns:
        ProcessResult with captured output and the exit code. A missing
        binary yields 127, a non-executable one 126.
    """
    argv = [get_httm_path(), *flags]
    logger.debug("Running %s (capture=%s)", argv, capture)

    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE if capture else None,
            text=True,
        )
    except FileNotFoundError:
        print(f"httm-keys: command not found: {argv[0]}", file=sys.stderr)
        logger.warning("httm binary not found: %s", argv[0])
        return ProcessResult(output="", exit_code=EXIT_NOT_FOUND)
    except PermissionError:
        print(f"httm-keys: permission denied: {argv[0]}", file=sys.stderr)
        logger.warning("httm binary not executable: %s", argv[0])
        return ProcessResult(output="", exit_code=EXIT_NOT_EXECUTABLE)

    output = result.stdout if capture and result.stdout is not None else ""
    exit_code = shell_status(result.returncode)
    logger.debug("%s exited with %d", argv[0], exit_code)
    return ProcessResult(output=output, exit_code=exit_code)


def execute_command(command: str) -> int:
    """Execute a host-shell command line via bash -c.

    Output streams directly to the terminal. Runs in the current
    working directory, which the shell changes in-process for cd.

    Args:
        command: The command string to execute.

    Returns:
        The command's exit code.
    """
    try:
        result = subprocess.run(["bash", "--norc", "--noprofile", "-c", command])
    except FileNotFoundError:
        print("httm-keys: bash not found", file=sys.stderr)
        logger.warning("bash not found on PATH")
        return EXIT_NOT_FOUND
    return shell_status(result.returncode)
