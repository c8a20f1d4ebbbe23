"""Interactive prompts used by the dep commands."""

from __future__ import annotations

import sys
from typing import TextIO

from svcdeps.errors import PromptError


def _read_line(prompt: str, stdin: TextIO, stdout: TextIO) -> str:
    stdout.write(prompt)
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise PromptError("no input available for interactive prompt")
    return line.strip()


def select_one(
    prompt: str,
    options: list[str],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Show a numbered menu and return the 0-based index of the chosen option."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    if not options:
        raise PromptError(f"{prompt}: no options to choose from")

    print(prompt, file=stdout)
    for i, option in enumerate(options, start=1):
        print(f"  {i}) {option}", file=stdout)

    while True:
        answer = _read_line(f"Enter choice [1-{len(options)}]: ", stdin, stdout)
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        # Accept the option text itself as well
        if answer in options:
            return options.index(answer)
        print(f"  Invalid choice: {answer!r}", file=stdout)


def confirm(
    prompt: str,
    default: bool = False,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> bool:
    """Ask a yes/no question; an empty answer returns default."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    hint = "[Y/n]" if default else "[y/N]"

    while True:
        answer = _read_line(f"{prompt} {hint} ", stdin, stdout).lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        print("  Please answer 'y' or 'n'.", file=stdout)
