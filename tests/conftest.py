from __future__ import annotations

from types import SimpleNamespace

import pytest

from cargomake.ui.console import Console, set_console


class RecordingConsole(Console):
    """Console that also keeps an ordered log of what was shown."""

    def __init__(self, events: list, debug: bool = False):
        super().__init__(debug=debug)
        self.events = events

    def print_banner(self, text: str) -> None:
        self.events.append(("banner", text))
        super().print_banner(text)

    def print_usage(self, text: str) -> None:
        self.events.append(("usage", text))
        super().print_usage(text)

    def clear(self) -> None:
        self.events.append(("clear",))


class FakeToolchain:
    """
    Stands in for subprocess.run. Exit codes are looked up by the
    toolchain subcommand ("build", "check", ...), default 0.
    """

    def __init__(self, events: list):
        self.events = events
        self.codes: dict[str, int] = {}
        self.missing = False
        self.calls: list[tuple[str, ...]] = []
        self.before = None

    def __call__(self, args, cwd=None, env=None, **kwargs):
        argv = tuple(args)
        if self.before is not None:
            self.before(argv)
        if self.missing:
            raise FileNotFoundError(argv[0])
        self.calls.append(argv)
        self.events.append(("exec", argv))
        sub = argv[1] if len(argv) > 1 else ""
        return SimpleNamespace(returncode=self.codes.get(sub, 0))

    @property
    def subcommands(self) -> list[str]:
        return [c[1] for c in self.calls]


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def console(events):
    c = RecordingConsole(events)
    set_console(c)
    yield c
    set_console(Console())


@pytest.fixture
def toolchain(monkeypatch, events):
    fake = FakeToolchain(events)
    monkeypatch.setattr("cargomake.runner.subprocess.run", fake)
    return fake
