# runner.py
from __future__ import annotations

import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

from .dag import resolve_goals, validate
from .model import Config, Outcome, Step, Target
from .targets import build_targets
from .ui.console import get_console


TOOL_HINTS = {
    "cargo": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
    "rustc": "Install the Rust toolchain (https://rustup.rs) or fix PATH.",
}

# shell convention for "command not found"
EXIT_NOT_FOUND = 127
# shell convention for "killed by signal N" is 128 + N
EXIT_SIGNAL_BASE = 128


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass
class StepFailure(Exception):
    target: str
    step: str
    cmd: str
    exit_code: int

    def __str__(self) -> str:
        return f"[{self.target}] step '{self.step}' failed (exit={self.exit_code}): {self.cmd}"


@dataclass
class ToolUnavailable(StepFailure):
    exit_code: int = EXIT_NOT_FOUND
    hint: str = field(default="")

    def __str__(self) -> str:
        return f"[{self.target}] {shlex.split(self.cmd)[0]} is not available"


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def purge_dir(path: str | Path) -> None:
    """
    Remove everything inside `path`. A missing directory is fine.
    The directory itself is kept, like `rm -rf path/*`.
    """
    p = Path(path)
    if not p.is_dir():
        return
    for child in p.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def _exec(target: Target, step: Step, cwd: Path) -> None:
    try:
        proc = subprocess.run(list(step.args), cwd=str(cwd), env=os.environ.copy())
    except FileNotFoundError:
        tool = step.args[0]
        raise ToolUnavailable(
            target=target.name,
            step=step.kind,
            cmd=step.cmd,
            hint=TOOL_HINTS.get(tool, f"Install {tool} or fix PATH."),
        )

    code = proc.returncode
    if code < 0:
        code = EXIT_SIGNAL_BASE - code
    if code != 0:
        raise StepFailure(
            target=target.name,
            step=step.kind,
            cmd=step.cmd,
            exit_code=code,
        )


def _run_step(target: Target, step: Step, cwd: Path) -> None:
    if step.kind == "purge":
        try:
            purge_dir(cwd / step.args[0])
        except OSError as e:
            raise StepFailure(target=target.name, step=step.kind, cmd=step.cmd, exit_code=1) from e
    elif step.kind == "clear":
        get_console().clear()
    elif step.kind == "exec":
        _exec(target, step, cwd)
    else:
        raise ValueError(f"[{target.name}] unknown step kind: {step.kind!r}")


def run_target(target: Target, cwd: Path, *, dry_run: bool = False) -> Outcome:
    """
    Print the target's banner, then run its steps in order.
    The banner is printed before anything that can fail.
    """
    console = get_console()
    if target.banner is not None:
        if target.kind == "usage":
            console.print_usage(target.banner)
        else:
            console.print_banner(target.banner)

    for step in target.steps:
        if dry_run:
            console.print_command(step.cmd)
            continue
        console.print_debug(f"[{target.name}] {step.cmd}")
        _run_step(target, step, cwd)

    return Outcome(target=target.name, status="skipped" if dry_run else "ok")


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run_plan(
    targets: Dict[str, Target],
    plan: Iterable[str],
    *,
    cwd: str | Path = ".",
    dry_run: bool = False,
) -> List[Outcome]:
    """
    Run the planned targets one after another.

    Stops at the first failing step: the failure is recorded as the last
    outcome and nothing after it runs.
    """
    cwd_p = Path(cwd).resolve()
    outcomes: List[Outcome] = []

    for name in plan:
        try:
            outcomes.append(run_target(targets[name], cwd_p, dry_run=dry_run))
        except StepFailure as e:
            outcomes.append(Outcome(target=name, status="failed", exit_code=e.exit_code))
            _report(e)
            break

    return outcomes


def _report(e: StepFailure) -> None:
    console = get_console()
    hint = e.hint if isinstance(e, ToolUnavailable) else None
    console.print_failure(e.target, e.cmd, exit_code=e.exit_code, hint=hint)


def exit_code(outcomes: Iterable[Outcome]) -> int:
    """0 if every outcome succeeded, else the first failing exit code."""
    for o in outcomes:
        if o.status == "failed":
            return o.exit_code or 1
    return 0


def dispatch(
    config: Config,
    goals: Iterable[str] = (),
    *,
    cwd: str | Path = ".",
    dry_run: bool = False,
) -> int:
    """Build the table for `config`, resolve `goals` and run them."""
    targets = build_targets(config)
    validate(targets)

    plan = resolve_goals(targets, goals, default=config.default_target)
    get_console().print_debug(f"plan: {plan}")

    return exit_code(run_plan(targets, plan, cwd=cwd, dry_run=dry_run))
