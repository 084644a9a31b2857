"""Writing index data for the renderers."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .indexer import EventNumbering, Index
from .models import EventLocation


def index_payload(index: Index, numbering: EventNumbering) -> dict[str, Any]:
    """Plain data for one index plus the numbering it refers to."""
    return {
        "index": index.to_dict(),
        "events": {str(number): event_id for number, event_id in enumerate(numbering.ids, 1)},
    }


def grid_payload(locations: tuple[EventLocation, ...]) -> list[dict[str, Any]]:
    """Events in grid order with the fields the grid prints."""
    return [
        {
            "number": loc.number,
            "id": loc.event.id,
            "name": loc.event.name,
            "date": loc.event.date,
            "place": loc.event.place,
            "map": loc.event.map,
            "region": loc.region,
        }
        for loc in sorted(locations, key=lambda loc: loc.number)
    ]


def _tmp_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def write_json_files(files: Mapping[Path, Any]) -> list[Path]:
    """Write several JSON files as one set.

    Every payload is serialised to a temp file first; the targets are
    replaced only once all temp files exist, so a failure or interrupt
    while writing leaves the previous set untouched.
    """
    targets = [Path(path) for path in files]
    try:
        for target, payload in zip(targets, files.values()):
            target.parent.mkdir(parents=True, exist_ok=True)
            _tmp_path(target).write_text(
                json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
            )
    except BaseException:
        for target in targets:
            _tmp_path(target).unlink(missing_ok=True)
        raise

    for target in targets:
        os.replace(_tmp_path(target), target)
    return targets
