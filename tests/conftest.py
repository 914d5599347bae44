"""Shared pytest fixtures for the Pictoboard test suite."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Generator, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pictoboard.config import get_settings
from pictoboard.models.word import Word, WordCategory
from pictoboard.server.app import create_app
from pictoboard.vocabulary.repository import load_vocabulary


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test starts from default settings, free of host env and .env files."""

    for key in list(os.environ):
        if key.startswith("PICTOBOARD_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PICTOBOARD_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo root handler changes made by configure_logging during a test."""

    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture()
def vocabulary() -> List[Word]:
    """Bundled default vocabulary."""

    return load_vocabulary()


@pytest.fixture()
def words(vocabulary) -> Dict[str, Word]:
    """Bundled vocabulary indexed by id."""

    return {word.id: word for word in vocabulary}


@pytest.fixture()
def make_word() -> Callable[..., Word]:
    """Factory for ad-hoc words; the Spanish text defaults to the id."""

    def _make(word_id: str, category: WordCategory = WordCategory.SUSTANTIVOS, **kwargs) -> Word:
        return Word(id=word_id, spanish=kwargs.pop("spanish", word_id.replace("_", " ")), category=category, **kwargs)

    return _make


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)
