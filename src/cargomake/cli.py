# cli.py
from __future__ import annotations

import sys

import click

from cargomake.config import load_config
from cargomake.dag import TargetError
from cargomake.model import VARIANTS
from cargomake.runner import dispatch
from cargomake.ui.console import Console, set_console


@click.command()
@click.argument("targets", nargs=-1)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.option("--dry-run", "-n", is_flag=True, default=False, help="Print the commands without running them")
@click.option(
    "--variant",
    type=click.Choice(VARIANTS),
    default=None,
    help="Target table to use (defaults to $CARGOMAKE_VARIANT or 'standard')",
)
@click.option("--name", default=None, help="Project name shown by 'check'")
@click.option("--toolchain", default=None, help="Toolchain executable (defaults to cargo)")
@click.option(
    "--directory",
    "-C",
    default=".",
    type=click.Path(exists=True, file_okay=False),
    help="Run as if started in this directory",
)
def cli(targets, debug, dry_run, variant, name, toolchain, directory):
    """cargomake: run build/clean/check/compile/run/help/all targets for a Rust crate."""
    console = Console(debug=debug)
    set_console(console)

    try:
        config = load_config(variant=variant, name=name, toolchain=toolchain)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="CARGOMAKE_VARIANT")

    console.print_debug(f"config: {config}")

    try:
        code = dispatch(config, targets, cwd=directory, dry_run=dry_run)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except TargetError as e:
        console.print_error("Invalid target table", str(e))
        sys.exit(2)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    sys.exit(code)


def main() -> None:
    cli(prog_name="cargomake")


if __name__ == "__main__":
    main()
