"""
Tests for the store inspection CLI.
"""

import json

import pytest
from typer.testing import CliRunner

from typedconf.cli.exit_codes import EXIT_CONFIG_ERROR, EXIT_ERROR
from typedconf.cli.main import app
from typedconf.core.config.persistence import SectionStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def populated_store(store_path):
    store = SectionStore(store_path)
    store.write_all(store.open_or_create("AppSettings"), {"name": "demo", "count": "3"})
    store.open_or_create("Empty")
    return store_path


def test_sections_lists_key_counts(runner, populated_store):
    result = runner.invoke(app, ["sections", "--store", str(populated_store)])

    assert result.exit_code == 0
    assert "AppSettings" in result.stdout
    assert "Empty" in result.stdout


def test_show_json(runner, populated_store):
    result = runner.invoke(app, ["show", "AppSettings", "--store", str(populated_store), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"name": "demo", "count": "3"}


def test_show_table(runner, populated_store):
    result = runner.invoke(app, ["show", "AppSettings", "--store", str(populated_store)])

    assert result.exit_code == 0
    assert "demo" in result.stdout


def test_show_missing_section(runner, populated_store):
    result = runner.invoke(app, ["show", "Missing", "--store", str(populated_store)])
    assert result.exit_code == EXIT_ERROR


def test_missing_store(runner, tmp_path):
    result = runner.invoke(app, ["sections", "--store", str(tmp_path / "nope.json")])
    assert result.exit_code == EXIT_CONFIG_ERROR


def test_corrupt_store(runner, store_path):
    store_path.parent.mkdir(parents=True)
    store_path.write_text("{broken", encoding="utf-8")
    result = runner.invoke(app, ["show", "AppSettings", "--store", str(store_path)])
    assert result.exit_code == EXIT_CONFIG_ERROR
