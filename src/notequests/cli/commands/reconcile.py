"""Reconcile command parsing and formatting."""

from __future__ import annotations

import argparse

from pydantic import ValidationError

from notequests.cli.progress.rich import RichReconcileProgress
from notequests.config import load_config
from notequests.contracts.config import NoteQuestsConfig
from notequests.contracts.exceptions import ConfigError
from notequests.contracts.geo import BoundingBox, TileRect
from notequests.contracts.reconcile import ReconciliationResult
from notequests.sdk import FROM_CONFIG, NoteQuests


def _split_numbers(value: str, *, option: str) -> list[str]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4 or not all(parts):
        raise ConfigError(f"{option} expects four comma-separated numbers, got {value!r}")
    return parts


def parse_tiles(value: str) -> TileRect:
    parts = _split_numbers(value, option="--tiles")
    try:
        left, top, right, bottom = (int(part) for part in parts)
        return TileRect(left=left, top=top, right=right, bottom=bottom)
    except (ValueError, ValidationError) as exc:
        raise ConfigError(f"invalid --tiles {value!r}: {exc}") from exc


def parse_bbox(value: str) -> BoundingBox:
    parts = _split_numbers(value, option="--bbox")
    try:
        min_lon, min_lat, max_lon, max_lat = (float(part) for part in parts)
        return BoundingBox(min_lat=min_lat, min_lon=min_lon, max_lat=max_lat, max_lon=max_lon)
    except (ValueError, ValidationError) as exc:
        raise ConfigError(f"invalid --bbox {value!r}: {exc}") from exc


def format_reconcile_summary(result: ReconciliationResult, config: NoteQuestsConfig) -> str:
    tiles = result.tiles
    lines = [
        "",
        "notequests - reconcile complete",
        "",
        f"  Tiles:     {tiles.key} (zoom {config.tile_zoom})",
        f"  Server:    {config.api_url}",
        "",
        f"  Notes:     {result.fetched} fetched ({result.visible_count} visible, {result.hidden_count} hidden)",
    ]
    if result.new_count > 0:
        lines.append(f"  Created:   {result.new_count}")
    if result.closed_count > 0:
        lines.append(f"  Removed:   {result.closed_count}")
    if result.new_count == 0 and result.closed_count == 0:
        lines.append("  Status:    all quests up to date")
    lines.append(f"  Positions: {len(result.positions)}")
    lines.append("")
    lines.append(f"  State:     {config.state_path}")
    lines.append("")
    return "\n".join(lines)


def run_reconcile(args: argparse.Namespace) -> ReconciliationResult:
    config = load_config(args.config)

    user_id = FROM_CONFIG if args.user_id is None else args.user_id
    max_results = FROM_CONFIG if args.max_results is None else args.max_results

    def _reconcile(sdk: NoteQuests) -> ReconciliationResult:
        if args.tiles is not None:
            return sdk.reconcile(parse_tiles(args.tiles), user_id=user_id, max_results=max_results)
        return sdk.reconcile_bbox(parse_bbox(args.bbox), user_id=user_id, max_results=max_results)

    if not args.verbose:
        with RichReconcileProgress() as progress, NoteQuests.from_config(config, progress=progress) as sdk:
            result = _reconcile(sdk)
            sdk.save()
    else:
        with NoteQuests.from_config(config) as sdk:
            result = _reconcile(sdk)
            sdk.save()

    print(format_reconcile_summary(result, config))
    return result


__all__ = ["format_reconcile_summary", "parse_bbox", "parse_tiles", "run_reconcile"]
