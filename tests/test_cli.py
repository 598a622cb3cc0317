from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

import breitling_nav.cli as cli

runner = CliRunner()


def _settings(**overrides):
    values = {
        "BN_DEEP_LINK_SCHEMES": [],
        "BN_DEFAULT_TAB": "collections",
        "BN_ROOT_LABEL": "Home",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture(autouse=True)
def _quiet_cli(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda settings: None)
    monkeypatch.setattr(cli, "load_settings", lambda: _settings())


def test_destinations_json():
    result = runner.invoke(cli.app, ["destinations", "--json"])
    assert result.exit_code == 0, result.output

    rows = json.loads(result.output)
    assert len(rows) == 25
    by_kind = {row["kind"]: row for row in rows}
    assert by_kind["membership_benefits"] == {
        "kind": "membership_benefits",
        "title": "Membership",
        "requires_authentication": True,
        "is_premium_content": True,
    }
    assert by_kind["limited_editions"]["requires_authentication"] is False


def test_destinations_table():
    result = runner.invoke(cli.app, ["destinations"])
    assert result.exit_code == 0, result.output
    assert "Customize Watch" in result.output


def test_resolve_json_match():
    result = runner.invoke(cli.app, ["resolve", "app://ar?product=XYZ", "--json"])
    assert result.exit_code == 0, result.output

    obj = json.loads(result.output)
    assert obj["status"] == "matched"
    assert obj["destination"] == {"kind": "ar_try_on", "title": "AR Try-On", "params": {"product_id": "XYZ"}}


def test_resolve_missing_parameter():
    result = runner.invoke(cli.app, ["resolve", "app://product"])
    assert result.exit_code == 0, result.output
    assert "missing_parameter" in result.output


def test_resolve_malformed_exits_nonzero():
    result = runner.invoke(cli.app, ["resolve", "not a link", "--json"])
    assert result.exit_code == 1
    assert json.loads(result.output)["status"] == "malformed"


def test_resolve_respects_configured_schemes(monkeypatch):
    monkeypatch.setattr(cli, "load_settings", lambda: _settings(BN_DEEP_LINK_SCHEMES=["breitling"]))
    result = runner.invoke(cli.app, ["resolve", "app://orders", "--json"])
    assert result.exit_code == 1


def test_simulate_json():
    result = runner.invoke(
        cli.app,
        ["simulate", "app://orders", "app://order?id=42", "app://product", "--tab", "account", "--json"],
    )
    assert result.exit_code == 0, result.output

    obj = json.loads(result.output)
    assert obj["tab"] == "account"
    assert [r["status"] for r in obj["results"]] == ["matched", "matched", "missing_parameter"]
    assert [p["kind"] for p in obj["path"]] == ["order_history", "order_detail"]
    assert obj["breadcrumbs"] == "Home > Order History > Order Details"


def test_simulate_unknown_host_resets():
    result = runner.invoke(cli.app, ["simulate", "app://product?id=1", "app://nowhere", "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["path"] == []


def test_simulate_unknown_tab():
    result = runner.invoke(cli.app, ["simulate", "app://orders", "--tab", "cart"])
    assert result.exit_code == 2
    assert "Unknown tab" in result.output


def test_simulate_table_output():
    result = runner.invoke(cli.app, ["simulate", "app://collection?id=navitimer"])
    assert result.exit_code == 0, result.output
    assert "Home > Collection" in result.output


def test_invalid_default_tab_is_reported(monkeypatch, tmp_path):
    import breitling_nav.settings as settings_module

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BN_DEFAULT_TAB", "cart")
    monkeypatch.setattr(cli, "load_settings", settings_module.load_settings)

    result = runner.invoke(cli.app, ["simulate", "app://orders"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output
    assert not isinstance(result.exception, ValueError)
