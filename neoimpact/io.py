"""I/O helpers: load NeoWs feeds and SBDB payloads, export impact analyses to JSON."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import json
import logging

from .asteroids import Asteroid
from .effects import ImpactAnalysis

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_json(path: PathLike) -> Any:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    logger.debug("Loaded %s", path)
    return payload


def flatten_neo_feed(feed: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Flatten a NeoWs feed response into a list of NEO records.

    ``near_earth_objects`` maps dates to lists of objects; records are returned
    in date order.
    """
    by_date = feed.get("near_earth_objects")
    if not isinstance(by_date, dict):
        raise ValueError("NeoWs feed has no 'near_earth_objects' mapping")
    neos: List[Dict[str, Any]] = []
    for date in sorted(by_date):
        neos.extend(by_date[date] or [])
    return neos


def load_neo_feed(path: PathLike) -> List[Dict[str, Any]]:
    """Load NEO records from a NeoWs feed file, or from a file holding a plain list of records."""
    payload = load_json(path)
    if isinstance(payload, list):
        neos = payload
    else:
        neos = flatten_neo_feed(payload)
    if not neos:
        raise ValueError(f"No near-Earth objects in {path}")
    logger.debug("%d near-Earth objects in %s", len(neos), path)
    return neos


def load_asteroids(path: PathLike) -> List[Asteroid]:
    """Load asteroids from an SBDB response file (a single payload or a list of payloads)."""
    payload = load_json(path)
    payloads = payload if isinstance(payload, list) else [payload]
    if not payloads:
        raise ValueError(f"No SBDB payloads in {path}")
    return [Asteroid.from_sbdb(p) for p in payloads]


def serialize_analyses(analyses: Sequence[ImpactAnalysis]) -> List[Dict[str, Any]]:
    return [analysis.model_dump(mode="json") for analysis in analyses]


def write_analyses(
    output_path: PathLike,
    analyses: Sequence[ImpactAnalysis],
    *,
    density: float,
    angle: float,
    distance: float,
) -> None:
    output_path = Path(output_path)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "scenario": {
            "density_g_cm3": density,
            "impact_angle_deg": angle,
            "distance_km": distance,
        },
        "analyses": serialize_analyses(analyses),
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
    logger.debug("Wrote %d analyses to %s", len(analyses), output_path)


__all__ = [
    "load_json",
    "flatten_neo_feed",
    "load_neo_feed",
    "load_asteroids",
    "serialize_analyses",
    "write_analyses",
]
