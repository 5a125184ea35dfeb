# targets.py
from __future__ import annotations

from typing import Dict, List

from .model import MINIMAL, STANDARD, VARIANTS, Config, Step, Target


# ---------------------------------------------------------------------
# Step helpers
# ---------------------------------------------------------------------

def tool(config: Config, *args: str) -> Step:
    """Run the configured toolchain with the given arguments."""
    return Step(kind="exec", args=(config.toolchain, *args))


def purge(path: str) -> Step:
    """Delete everything inside `path`, keeping the directory itself."""
    return Step(kind="purge", args=(path,))


def clear() -> Step:
    return Step(kind="clear")


# ---------------------------------------------------------------------
# Target helpers
# ---------------------------------------------------------------------

def chain(name: str, *needs: str) -> Target:
    return Target(name=name, kind="chain", needs=tuple(needs))


def command(name: str, banner: str, *steps: Step) -> Target:
    return Target(name=name, kind="command", banner=banner, steps=tuple(steps))


def usage(name: str, text: str) -> Target:
    return Target(name=name, kind="usage", banner=text)


# ---------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------

USAGE = {
    STANDARD: '> Usage: "make <build> <clean> <check> <compile> <run> <all>"',
    MINIMAL: '> Usage: "make [clean] [check] [compile] [run] [all]"',
}

ALL_CHAIN = {
    STANDARD: ("check", "clean", "build", "run"),
    MINIMAL: ("check", "clean", "run"),
}


def _shared(config: Config) -> List[Target]:
    return [
        command(
            "clean",
            "> Cleaning build directory...",
            purge(config.build_dir),
            tool(config, "clean"),
        ),
        command("check", f"> Checking {config.name}", tool(config, "check")),
        command("compile", "> Compiling program...", tool(config, "build")),
        command("run", "> Running program...", clear(), tool(config, "run")),
    ]


def build_targets(config: Config) -> Dict[str, Target]:
    """
    Return the target table for config.variant.

    The two variants differ only in whether a `build` target exists and
    whether `all` goes through it.
    """
    variant = config.variant
    if variant not in VARIANTS:
        raise ValueError(f"Unknown variant {variant!r}. Known variants: {list(VARIANTS)}")

    targets = [
        chain("all", *ALL_CHAIN[variant]),
        chain("default", "help"),
    ]
    if variant == STANDARD:
        targets.append(command("build", "> Building expr.rs...", tool(config, "build")))
    targets.extend(_shared(config))
    targets.append(usage("help", USAGE[variant]))

    return {t.name: t for t in targets}
