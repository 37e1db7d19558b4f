"""Local state file persistence helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from notequests.contracts.exceptions import ConfigError, StorageError
from notequests.persistence.state import LocalState


def persist_state(*, state: LocalState, state_path: Path) -> None:
    try:
        state_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = state_path.with_name(f"{state_path.name}.tmp")
        tmp_path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        tmp_path.replace(state_path)
    except OSError as exc:
        raise StorageError(f"failed to persist local state: {state_path}") from exc


def load_state(*, state_path: Path) -> LocalState:
    if not state_path.exists():
        return LocalState()
    try:
        payload: Any = json.loads(state_path.read_text(encoding="utf-8"))
        return LocalState.model_validate(payload)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"invalid state file: {state_path}") from exc
