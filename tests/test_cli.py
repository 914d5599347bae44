"""Tests for the typer command-line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from pictoboard.cli import app

runner = CliRunner()


def test_suggest_prints_rule_suggestions():
    result = runner.invoke(app, ["suggest", "yo", "quiero", "--no-remote"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["sentence"] == "yo quiero"
    assert payload["source"] == "rules"
    assert payload["suggestions"][:3] == ["comer", "beber", "jugar"]
    assert payload["templates"] == ["Yo quiero ___"]


def test_suggest_without_configured_llm_uses_rules():
    result = runner.invoke(app, ["suggest", "feliz"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["source"] == "rules"
    assert payload["suggestions"] == ["ayudar", "mama", "papa", "por_favor"]


def test_suggest_respects_location():
    result = runner.invoke(app, ["suggest", "yo", "quiero", "--no-remote", "--location", "hospital"])

    assert result.exit_code == 0, result.output
    assert "jugar" not in json.loads(result.stdout)["suggestions"]


def test_suggest_rejects_unknown_word():
    result = runner.invoke(app, ["suggest", "pizza", "--no-remote"])

    assert result.exit_code == 1


def test_words_lists_and_searches():
    listing = runner.invoke(app, ["words", "--location", "escuela"])
    search = runner.invoke(app, ["words", "--search", "baño"])

    assert listing.exit_code == 0, listing.output
    assert "recreo\trecreo\tsustantivos" in listing.stdout.splitlines()
    assert search.stdout.splitlines() == ["bano\tbaño\tsustantivos"]


def test_words_with_unreadable_vocabulary_fails(tmp_path):
    result = runner.invoke(app, ["words", "--vocabulary", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
