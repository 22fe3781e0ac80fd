"""Pytest configuration for pi-partial-json tests."""

import json

import pytest

from pi_partial_json.settings import CONFIG_DIR_ENV

# Well-formed documents used by the prefix and round-trip tests.
DOCUMENTS = [
    {"a": 1, "b": [1, 2, 3], "c": {"d": "e"}},
    [1, -2.5, 3e10, -4.25e-3, 0, 12345678901234567890],
    {"name": "café \"quoted\" \\ back\\slash", "tab": "a\tb\nc", "emoji": "\U0001f600"},
    [True, False, None, [], {}, [[]], [{}], ""],
    {"nested": {"deeper": {"deepest": [{"k": [1, {"v": None}]}]}}},
    {"empty_key": {"": ""}, "unicode☃": "snow☃man"},
    "just a string with \"escapes\" and ü",
    12.5e3,
    True,
]


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep the CLI and settings tests away from the real home directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    return config_dir


@pytest.fixture
def compact_documents():
    """Documents serialized without whitespace, ASCII-escaped."""
    return [json.dumps(doc, separators=(",", ":")) for doc in DOCUMENTS]


@pytest.fixture
def pretty_documents():
    """Documents serialized with indentation and raw unicode."""
    return [json.dumps(doc, indent=2, ensure_ascii=False) for doc in DOCUMENTS]
