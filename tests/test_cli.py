from __future__ import annotations

import pytest
from click.testing import CliRunner

from cargomake.cli import cli

USAGE = '> Usage: "make <build> <clean> <check> <compile> <run> <all>"'


@pytest.fixture
def runner(monkeypatch):
    for key in ("NAME", "TOOLCHAIN", "VARIANT", "DEFAULT_TARGET", "BUILD_DIR"):
        monkeypatch.delenv(f"CARGOMAKE_{key}", raising=False)
    return CliRunner()


def test_no_target_prints_usage(runner, toolchain):
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert USAGE in result.output
    assert toolchain.calls == []


def test_unknown_target_prints_usage(runner, toolchain):
    result = runner.invoke(cli, ["deploy"])
    assert result.exit_code == 0
    assert result.output.strip() == USAGE


def test_check_exit_code_propagates(runner, toolchain, tmp_path):
    toolchain.codes["check"] = 101
    result = runner.invoke(cli, ["-C", str(tmp_path), "--name", "lox-ast", "check"])
    assert result.exit_code == 101
    assert "> Checking lox-ast" in result.output


def test_all_minimal_variant(runner, toolchain, tmp_path):
    result = runner.invoke(cli, ["-C", str(tmp_path), "--variant", "minimal", "all"])
    assert result.exit_code == 0
    assert toolchain.subcommands == ["check", "clean", "run"]


def test_multiple_goals_fail_fast(runner, toolchain, tmp_path):
    toolchain.codes["clean"] = 1
    result = runner.invoke(cli, ["-C", str(tmp_path), "clean", "build"])
    assert result.exit_code == 1
    assert toolchain.subcommands == ["clean"]
    assert "> Building expr.rs..." not in result.output


def test_toolchain_option(runner, toolchain, tmp_path):
    result = runner.invoke(cli, ["-C", str(tmp_path), "--toolchain", "cross", "compile"])
    assert result.exit_code == 0
    assert toolchain.calls == [("cross", "build")]


def test_dry_run(runner, toolchain, tmp_path):
    result = runner.invoke(cli, ["-C", str(tmp_path), "-n", "run"])
    assert result.exit_code == 0
    assert "cargo run" in result.output
    assert toolchain.calls == []


def test_variant_from_environment(runner, toolchain, monkeypatch):
    monkeypatch.setenv("CARGOMAKE_VARIANT", "minimal")
    result = runner.invoke(cli, ["help"])
    assert result.exit_code == 0
    assert '[clean] [check] [compile] [run] [all]' in result.output


def test_bad_variant_in_environment(runner, toolchain, monkeypatch):
    monkeypatch.setenv("CARGOMAKE_VARIANT", "beta")
    result = runner.invoke(cli, ["help"])
    assert result.exit_code == 2


def test_unexpected_error_exits_1(runner, toolchain, monkeypatch, tmp_path):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("cargomake.cli.dispatch", boom)
    result = runner.invoke(cli, ["-C", str(tmp_path), "check"])
    assert result.exit_code == 1
    assert "Error: boom" in result.output


def test_interrupt_exits_130(runner, toolchain, monkeypatch, tmp_path):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr("cargomake.cli.dispatch", interrupted)
    result = runner.invoke(cli, ["-C", str(tmp_path), "check"])
    assert result.exit_code == 130
