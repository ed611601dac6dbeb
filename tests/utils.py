"""Shared test utilities for httm-keys tests."""

import stat
from pathlib import Path


class RecordingEditor:
    """LineEditor that records what widgets do to it."""

    def __init__(self, lbuffer: str = ""):
        self.lbuffer = lbuffer
        self.appended: list[str] = []
        self.redraws = 0

    def append_to_lbuffer(self, text: str) -> None:
        self.appended.append(text)
        self.lbuffer += text

    def reset_prompt(self) -> None:
        self.redraws += 1


def write_stub_httm(directory: Path, output: str = "", exit_code: int = 0) -> Path:
    """Write an executable stand-in for httm.

    The stub prints its arguments to stderr, writes output to stdout
    and exits with exit_code.

    Returns:
        Path to the stub.
    """
    path = directory / "httm"
    body = output.replace("'", "'\\''")
    path.write_text(
        "#!/bin/sh\n"
        'echo "args: $*" >&2\n'
        f"printf '%s' '{body}'\n"
        f"exit {exit_code}\n"
    )
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_signalled_httm(directory: Path, signal_name: str = "TERM") -> Path:
    """Write an httm stand-in that kills itself with the given signal."""
    path = directory / "httm"
    path.write_text(f"#!/bin/sh\nkill -{signal_name} $$\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path
