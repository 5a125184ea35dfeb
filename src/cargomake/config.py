from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from .model import STANDARD, VARIANTS, Config

ENV_PREFIX = "CARGOMAKE_"


def _env(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(ENV_PREFIX + key)
    return value if value else None


def load_config(environ: Optional[Mapping[str, str]] = None, **overrides) -> Config:
    """
    Build the Config for this process.

    Precedence (lowest first): defaults, CARGOMAKE_* environment variables,
    keyword overrides (CLI options). Overrides that are None are ignored.
    """
    environ = os.environ if environ is None else environ
    overrides = {k: v for k, v in overrides.items() if v is not None}

    unknown = set(overrides) - set(Config.__dataclass_fields__)
    if unknown:
        raise TypeError(f"Unknown config fields: {sorted(unknown)}")

    variant = overrides.get("variant") or _env(environ, "VARIANT") or STANDARD
    if variant not in VARIANTS:
        raise ValueError(f"Unknown variant {variant!r}. Known variants: {list(VARIANTS)}")

    home = environ.get("HOME")
    prefix = _env(environ, "PREFIX") or (Path(home) / ".local" if home else Path.home() / ".local")

    values = {
        "version": _env(environ, "VERSION") or "1.0",
        "name": _env(environ, "NAME"),
        "exec_name": _env(environ, "EXEC") or "rust-exec",
        "prefix": Path(prefix),
        "toolchain": _env(environ, "TOOLCHAIN") or "cargo",
        "build_dir": _env(environ, "BUILD_DIR") or "target",
        "variant": variant,
        "default_target": _env(environ, "DEFAULT_TARGET") or "help",
    }
    values.update(overrides)
    if "prefix" in overrides:
        values["prefix"] = Path(overrides["prefix"])

    return Config(**values)
