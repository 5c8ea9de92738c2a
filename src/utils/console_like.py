from __future__ import annotations

from typing import Protocol

from rich.console import Console, ConsoleRenderable


class ConsoleLike(Protocol):
    """Output surface the reconciliation steps report through."""

    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


class StdoutConsole:
    """Minimal console fallback.

    Keeps the deployment steps usable without importing the CLI console.
    Renderables and markup are drawn without colour; warnings and errors
    go to stderr.
    """

    def __init__(self) -> None:
        self._out = Console(highlight=False, no_color=True, soft_wrap=True)
        self._err = Console(
            stderr=True, highlight=False, no_color=True, soft_wrap=True
        )

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self._out.print("" if msg is None else msg)

    def info(self, msg: str) -> None:
        self._out.print(msg, markup=False)

    def warn(self, msg: str) -> None:
        self._err.print(f"Warning: {msg}", markup=False)

    def error(self, msg: str) -> None:
        self._err.print(f"ERROR: {msg}", markup=False)

    def ok(self, msg: str) -> None:
        self._out.print(msg, markup=False)


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    return console if console is not None else StdoutConsole()
