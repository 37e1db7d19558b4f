"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_API_URL = "https://api.openstreetmap.org/api/0.6"


class NoteQuestsConfig(BaseModel):
    api_url: str = DEFAULT_API_URL
    user_id: int | None = None
    max_results: int = Field(default=0, ge=0, le=10000)
    tile_zoom: int = Field(default=14, ge=0, le=22)
    show_notes_not_phrased_as_questions: bool = False
    state_path: Path = Path("notequests-state.json")
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0, le=10)
    user_agent: str = "notequests"

    model_config = {"frozen": True}

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, value: str) -> str:
        candidate = value.strip().rstrip("/")
        if not candidate.startswith(("http://", "https://")):
            raise ValueError("api_url must be an http(s) URL")
        return candidate
