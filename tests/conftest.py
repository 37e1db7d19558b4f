"""Shared test fixtures for notequests tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from notequests.contracts.config import NoteQuestsConfig
from tests.fakes.harness import Harness, build_harness


@pytest.fixture
def harness() -> Harness:
    """A reconciler over empty in-memory stores."""
    return build_harness()


@pytest.fixture
def sample_config(tmp_path: Path) -> NoteQuestsConfig:
    """A minimal valid config writing state under *tmp_path*."""
    return NoteQuestsConfig(state_path=tmp_path / "state.json", user_id=42)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config file on disk with a relative state path."""
    path = tmp_path / "notequests.json"
    path.write_text(json.dumps({"user_id": 42, "state_path": "state/notequests-state.json"}), encoding="utf-8")
    return path
