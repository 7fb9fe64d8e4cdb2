"""CLI tests via click's CliRunner."""

import json

import httpx
import pytest
from click.testing import CliRunner

import movcli.cli.main as cli_main
import movcli.config as config_mod
from movcli.cli.main import main
from movcli.fetcher import Fetcher

HTML = (
    '<a class="item" href="/watch/alien"><span>Movie</span><span>1979</span>'
    '<span>117m</span><div class="title">Alien</div></a>'
)


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_mod, "CONFIG_FILE", path)
    return path


def use_transport(monkeypatch, handler):
    def _get_fetcher():
        cfg = cli_main._get_config()
        return Fetcher(base_url=cfg.base_url, transport=httpx.MockTransport(handler))
    monkeypatch.setattr(cli_main, "_get_fetcher", _get_fetcher)


def ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"status": "ok", "result": {"count": 1, "html": HTML}})


def empty(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"status": "ok", "result": {"count": 0, "html": ""}})


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_find_json(monkeypatch):
    use_transport(monkeypatch, ok)
    result = CliRunner().invoke(main, ["find", "alien", "--json"])
    assert result.exit_code == 0, result.output
    row = json.loads(result.output.strip().splitlines()[0])
    assert row["title"] == "Alien"
    assert row["url"] == "https://movhub.ws/watch/alien"


def test_find_uses_base_url_override(monkeypatch):
    use_transport(monkeypatch, ok)
    result = CliRunner().invoke(main, ["--base-url", "https://mirror.example", "find", "alien", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output.splitlines()[0])["url"] == "https://mirror.example/watch/alien"


def test_find_table(monkeypatch):
    use_transport(monkeypatch, ok)
    result = CliRunner().invoke(main, ["find", "alien"])
    assert result.exit_code == 0, result.output
    assert "Alien" in result.output


def test_find_no_results(monkeypatch):
    use_transport(monkeypatch, empty)
    result = CliRunner().invoke(main, ["find", "batman", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.output) == {"error": "no_results", "message": 'no results for "batman"'}


def test_interactive_without_terminal_exits_nonzero():
    result = CliRunner().invoke(main, ["search"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_config_set_and_show(config_file):
    runner = CliRunner()
    result = runner.invoke(main, ["config", "set", "timeout", "4"])
    assert result.exit_code == 0, result.output
    assert json.loads(config_file.read_text())["timeout"] == 4.0

    result = runner.invoke(main, ["config", "show", "--json"])
    assert json.loads(result.output)["timeout"] == 4.0


def test_config_set_rejects_bad_value(config_file):
    result = CliRunner().invoke(main, ["config", "set", "char_limit", "0"])
    assert result.exit_code == 1
    assert not config_file.exists()


def test_config_reset(config_file):
    runner = CliRunner()
    runner.invoke(main, ["config", "set", "base_url", "https://mirror.example"])
    result = runner.invoke(main, ["config", "reset"])
    assert result.exit_code == 0
    assert json.loads(config_file.read_text())["base_url"] == "https://movhub.ws"
