"""End-to-end tests for the pickerkit CLI."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from pickerkit import __version__
from pickerkit.cli import cli
from pickerkit.config.discovery import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("pickerkit").setLevel(logging.NOTSET)
    structlog.reset_defaults()


class TestRoot:
    def test_help_without_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in ("parse", "format", "range", "overlay", "step"):
            assert name in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestParse:
    def test_date_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "date", "03/05/2026"])
        assert result.exit_code == 0
        assert result.output.startswith("OK parse_date")
        assert "2026-03-05" in result.output

    def test_date_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "parse", "date", "05.03.2026", "--locale", "de-DE"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["ok"] is True
        assert payload["data"]["value"] == "2026-03-05"

    def test_failure_exits_one(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "time", "25:00"])
        assert result.exit_code == 1
        assert "ERROR parse_time (parse)" in result.output

    def test_time_no_seconds(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "parse", "time", "9:30 pm", "--no-seconds"])
        assert json.loads(result.output)["data"]["value"] == "21:30"

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "--examples"])
        assert result.exit_code == 0
        assert "Examples for 'cli parse':" in result.output
        assert "pickerkit parse date 03/05/2026" in result.output


class TestFormat:
    def test_custom_pattern(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "format", "date", "2026-03-05", "--format", "custom", "--pattern", "DD.MM.YYYY"],
        )
        assert json.loads(result.output)["data"]["display"] == "05.03.2026"

    def test_twelve_hour(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "format", "time", "21:05", "--12h"])
        assert json.loads(result.output)["data"]["display"] == "9:05 PM"

    def test_bad_format_choice(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["format", "date", "2026-03-05", "--format", "short"])
        assert result.exit_code == 2


class TestRange:
    def test_normalize(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "range", "normalize", "2026-02-20", "2026-02-18"])
        assert json.loads(result.output)["data"] == {"start": "2026-02-18", "end": "2026-02-20"}

    def test_no_partial(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["range", "normalize", "2026-01-01", "", "--no-partial"])
        assert result.exit_code == 1
        assert "(partial)" in result.output

    def test_verbose_shows_detail(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-v", "range", "normalize", "2026-02-20", "2026-02-18", "--no-auto-normalize"]
        )
        assert result.exit_code == 1
        assert "start: 2026-02-20" in result.output


class TestOverlay:
    def test_place(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "overlay",
                "place",
                "--anchor",
                "100,700,200,40",
                "--panel",
                "320,300",
                "--viewport",
                "1200,800",
                "--scroll",
                "0,100",
            ],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["data"] == {"top": 492.0, "left": 100.0, "placement": "top"}

    def test_place_bad_numbers(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["overlay", "place", "--anchor", "1,2,3", "--panel", "1,1", "--viewport", "1,1"]
        )
        assert result.exit_code == 2
        assert "--anchor" in result.output

    def test_presentation(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "overlay", "presentation", "375"])
        assert json.loads(result.output)["data"]["presentation"] == "sheet"


class TestStep:
    def test_shift(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "step", "09:58", "--shift"])
        assert json.loads(result.output)["data"]["value"] == "10:23"

    def test_negative_delta(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "step", "00:02", "--delta", "-1"])
        assert json.loads(result.output)["data"]["value"] == "23:57"

    def test_step_from_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text("[picker]\nstep = 15\n")
        result = cli_runner.invoke(cli, ["--json", "-c", str(config), "step", "10:00"])
        assert json.loads(result.output)["data"]["value"] == "10:15"

    def test_step_out_of_range(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["step", "10:00", "--step", "0"])
        assert result.exit_code == 2
