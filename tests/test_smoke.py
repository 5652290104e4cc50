"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from ascii_sketch.__main__ import main


def test_import():
    import ascii_sketch

    assert ascii_sketch.sketch is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Draw boxes" in result.output
