from __future__ import annotations

from typer.testing import CliRunner

from bturl import cli
from bturl.core.model import Alias
from bturl.core.service import URLService
from bturl.core.url import URL


class FakeService(URLService):
    def __init__(self) -> None:
        super().__init__(
            aliases={
                "kitchen_sensor": Alias(
                    name="kitchen_sensor",
                    url=URL.parse("/B8:27:EB:60:0C:43/54:60:09:95:86:01"),
                    description="Kitchen temperature sensor",
                    source="<test>",
                ),
                "kitchen_battery": Alias(
                    name="kitchen_battery",
                    url=URL.parse("/B8:27:EB:60:0C:43/54:60:09:95:86:01/180f/2a19/Level"),
                    description=None,
                    source="<test>",
                ),
            }
        )


runner = CliRunner()


def test_parse_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["parse", "TinyB://b8:27:eb:60:0c:43/54:60:09:95:86:01/180F"])
    assert result.exit_code == 0
    assert "tinyb://B8:27:EB:60:0C:43/54:60:09:95:86:01/180f" in result.stdout
    assert "level: service" in result.stdout
    assert "device: 54:60:09:95:86:01" in result.stdout


def test_parse_command_accepts_alias(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["parse", "@kitchen_battery"])
    assert result.exit_code == 0
    assert "field: Level" in result.stdout


def test_parse_command_error_is_clean(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["parse", "not a url"])
    assert result.exit_code == 1
    assert "Error: Invalid URL: not a url" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_parent_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["parent", "@kitchen_battery"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "/B8:27:EB:60:0C:43/54:60:09:95:86:01/180f/2a19"

    result = runner.invoke(cli.app, ["parent", "/"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "<none>"


def test_sort_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(
        cli.app,
        ["sort", "/AA:AA:AA:AA:AA:AA", "/AA:AA:AA:AA:AA:AA/11:11:11:11:11:11"],
    )
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "/AA:AA:AA:AA:AA:AA/11:11:11:11:11:11",
        "/AA:AA:AA:AA:AA:AA",
    ]


def test_filter_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(
        cli.app,
        ["filter", "/B8:27:EB:60:0C:43", "@kitchen_battery", "/AA:AA:AA:AA:AA:AA", "@kitchen_sensor"],
    )
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "/B8:27:EB:60:0C:43/54:60:09:95:86:01/180f/2a19/Level",
        "/B8:27:EB:60:0C:43/54:60:09:95:86:01",
    ]


def test_check_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["check", "@kitchen_battery", "@kitchen_sensor"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "yes"

    result = runner.invoke(cli.app, ["check", "@kitchen_sensor", "@kitchen_battery"])
    assert result.exit_code == 1
    assert result.stdout.strip() == "no"


def test_unknown_alias_is_clean_error(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["parent", "@garage"])
    assert result.exit_code == 1
    assert "Error: Unknown alias 'garage'" in result.stderr


def test_aliases_command(monkeypatch):
    monkeypatch.setattr(cli, "URLService", FakeService)
    result = runner.invoke(cli.app, ["aliases"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "@kitchen_battery: /B8:27:EB:60:0C:43/54:60:09:95:86:01/180f/2a19/Level"
    assert "  Kitchen temperature sensor" in lines


def test_load_warning_is_printed(monkeypatch):
    class WarnService(FakeService):
        def __init__(self) -> None:
            super().__init__()
            self.load_warnings = ("Alias 'kitchen_sensor' from b.yaml overrides a.yaml",)

    monkeypatch.setattr(cli, "URLService", WarnService)
    result = runner.invoke(cli.app, ["aliases"])
    assert result.exit_code == 0
    assert "Warning: Alias 'kitchen_sensor' from b.yaml overrides a.yaml" in result.stderr
