"""JSON save/restore of location states."""
from __future__ import annotations

import json
import logging
from typing import Any

from tick_harvest.store import LocationStore
from tick_harvest.types import LocationDataError, RestoreResult

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


def serialize_location_states(store: LocationStore, now_ms: int) -> str:
    data: dict[str, Any] = {"version": FORMAT_VERSION, "timestamp": now_ms}
    data.update(store.snapshot())
    return json.dumps(data)


def _load(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LocationDataError(f"Invalid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise LocationDataError("Resource data must be a JSON object")
    if data.get("version") != FORMAT_VERSION:
        raise LocationDataError("Resource data version incompatible")
    states = data.get("locationStates")
    if states is not None and not isinstance(states, dict):
        raise LocationDataError("locationStates must be an object")
    return data


def deserialize_location_states(store: LocationStore, text: str | None) -> RestoreResult:
    """Replace the store's contents from serialized text.

    Never raises for bad input: any failure is reported in the result and
    leaves the store exactly as it was.
    """
    if not text:
        return RestoreResult(True, "No resource data to restore")
    try:
        data = _load(text)
        store.restore(data)
    except LocationDataError as exc:
        logger.warning("Rejected resource data: %s", exc)
        return RestoreResult(False, str(exc))
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Failed to restore resource data: %s", exc)
        return RestoreResult(False, f"Failed to restore resource data: {exc}")
    logger.info("Restored %d location states", len(store))
    return RestoreResult(True, f"Restored {len(store)} resource locations")
