# engine/storage.py
import json
import math
import os
from typing import Any, Callable, Dict, Mapping, Tuple

from ..data_model.records import (
    Asset,
    Goal,
    Liability,
    NetWorthSnapshot,
    Profile,
    SpendingItem,
)
from ..data_model.store import RecordStore
from ..log import get_logger

logger = get_logger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_compat(item) for item in value]
    return value


def load_state(path: str) -> Dict[str, Any]:
    """Raw persisted payload, or ``{}`` when the slot is missing or unreadable."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        logger.warning("state_load_failed", path=path, error=str(exc))
        return {}
    if not isinstance(data, dict):
        logger.warning("state_load_ignored", path=path, reason="top-level value is not an object")
        return {}
    return _sanitize_json_compat(data)


def save_state(path: str, payload: Mapping[str, Any]) -> bool:
    """Write ``payload`` atomically. Failures are logged and reported as ``False``."""
    tmp_path = f"{path}.tmp"
    try:
        ensure_user_data_dir(path)
        clean = _sanitize_json_compat(dict(payload))
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(clean, f, allow_nan=False)
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("state_save_failed", path=path, error=str(exc))
        return False
    logger.debug("state_saved", path=path)
    return True


def _load_records(raw: Any, factory: Callable[[Mapping[str, Any]], Any], key: str) -> Tuple[Any, ...]:
    if not isinstance(raw, list):
        logger.debug("state_field_ignored", field=key)
        return ()
    records = []
    for row in raw:
        if not isinstance(row, Mapping):
            continue
        records.append(factory(row))
    return tuple(records)


def store_from_payload(payload: Mapping[str, Any]) -> RecordStore:
    """Build a store from a persisted payload; each key falls back to its default on its own."""
    store_kwargs: Dict[str, Any] = {}

    profile = payload.get("profile")
    if isinstance(profile, Mapping):
        store_kwargs["profile"] = Profile.from_dict(profile)

    for key, attr, factory in (
        ("items", "items", SpendingItem.from_dict),
        ("goals", "goals", Goal.from_dict),
        ("assets", "assets", Asset.from_dict),
        ("liabilities", "liabilities", Liability.from_dict),
        ("netWorthHistory", "net_worth_history", NetWorthSnapshot.from_dict),
    ):
        if key in payload:
            store_kwargs[attr] = _load_records(payload[key], factory, key)

    if isinstance(payload.get("onboardingDone"), bool):
        store_kwargs["onboarding_done"] = payload["onboardingDone"]

    return RecordStore(**store_kwargs)


def store_to_payload(store: RecordStore) -> Dict[str, Any]:
    return {
        "profile": store.profile.to_dict(),
        "items": [item.to_dict() for item in store.items],
        "goals": [goal.to_dict() for goal in store.goals],
        "assets": [asset.to_dict() for asset in store.assets],
        "liabilities": [liability.to_dict() for liability in store.liabilities],
        "netWorthHistory": [point.to_dict() for point in store.net_worth_history],
        "onboardingDone": store.onboarding_done,
    }
