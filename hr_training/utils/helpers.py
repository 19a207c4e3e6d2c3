import json
import math
from typing import Any, Iterable, List


def safe_json_parse(value: Any, fallback: Any = None) -> Any:
    """Decode a stored JSON field, returning ``fallback`` when absent or corrupt."""
    if value is None:
        return fallback
    if not isinstance(value, (str, bytes)):
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return fallback


def normalize_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def dump_json(value: Any) -> str:
    return json.dumps(value, default=str)


def unique_ids(values: Iterable[Any]) -> List[Any]:
    """Drop falsy and repeated ids while keeping first-seen order."""
    seen = set()
    result = []
    for value in values or []:
        if not value or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    # zero denominators are defined as 0 percent
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
