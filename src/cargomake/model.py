# model.py
from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


STANDARD = "standard"
MINIMAL = "minimal"
VARIANTS = (STANDARD, MINIMAL)

# project name each Makefile declared
DEFAULT_NAMES = {
    STANDARD: "lox-ast",
    MINIMAL: "rust-makefile",
}


@dataclass(frozen=True)
class Config:
    """
    Process-wide settings, built once by config.load_config().

    version, exec_name and prefix are carried for completeness only:
    no target reads them. A name left as None takes the variant's default.
    """
    version: str = "1.0"
    name: str | None = None
    exec_name: str = "rust-exec"
    prefix: Path = field(default_factory=lambda: Path.home() / ".local")
    toolchain: str = "cargo"
    build_dir: str = "target"
    variant: str = STANDARD
    default_target: str = "help"

    def __post_init__(self) -> None:
        if self.name is None:
            object.__setattr__(self, "name", DEFAULT_NAMES.get(self.variant, DEFAULT_NAMES[STANDARD]))


@dataclass(frozen=True)
class Step:
    """A single action inside a command target."""
    kind: str                      # "exec" | "purge" | "clear"
    args: Tuple[str, ...] = ()

    @property
    def cmd(self) -> str:
        if self.kind == "exec":
            return shlex.join(self.args)
        if self.kind == "purge":
            return f"rm -rf {self.args[0]}/*"
        return self.kind


@dataclass(frozen=True)
class Target:
    """
    A named unit of work.

    kind:
      - "chain":   runs `needs` in order, nothing of its own
      - "command": prints `banner`, then runs `steps` in order
      - "usage":   prints `banner` and nothing else
    """
    name: str
    kind: str
    needs: Tuple[str, ...] = ()
    banner: str | None = None
    steps: Tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        if self.kind == "chain":
            if self.steps or self.banner is not None:
                raise ValueError(f"chain target {self.name!r} cannot carry a banner or steps")
        elif self.kind == "command":
            if not self.steps:
                raise ValueError(f"command target {self.name!r} must have at least one step")
            if self.needs:
                raise ValueError(f"command target {self.name!r} cannot have needs")
        elif self.kind == "usage":
            if self.steps or self.needs:
                raise ValueError(f"usage target {self.name!r} cannot have needs or steps")
        else:
            raise ValueError(f"unknown target kind: {self.kind!r}")

    @property
    def is_chain(self) -> bool:
        return self.kind == "chain"


@dataclass(frozen=True)
class Outcome:
    target: str
    status: str                    # "ok" | "failed" | "skipped"
    exit_code: int = 0
