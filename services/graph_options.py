from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet

# Campus suffix digit carried as the last character of a course code
LOCATION_CODES: Dict[str, str] = {
    "main": "1",
    "satellite-a": "3",
    "satellite-b": "5",
}


@dataclass(frozen=True)
class GraphOptions:
    departments: FrozenSet[str] = field(default_factory=frozenset)
    locations: FrozenSet[str] = field(default_factory=frozenset)
    include_raws: bool = False
    include_grades: bool = False
    # Completed courses: kept in the graph, their prerequisites are not expanded
    taken: FrozenSet[str] = field(default_factory=frozenset)


def default_graph_options() -> GraphOptions:
    return GraphOptions()


def _text_set(value: Any, key: str) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        raise ValueError(f'Option "{key}" must be a list or a comma-separated string.')

    out = set()
    for p in parts:
        if not isinstance(p, str):
            raise ValueError(f'Option "{key}" must only contain strings.')
        s = p.strip()
        if s:
            out.add(s)
    return frozenset(out)


def _flag(value: Any, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    raise ValueError(f'Option "{key}" must be a boolean.')


def options_from_payload(payload: Dict[str, Any] | None) -> GraphOptions:
    """
    Build GraphOptions from a request body.

    Accepted keys: departments, location, includeRaws, includeGrades, taken.
    Location values are not validated here; unknown ones filter out every course.
    """
    payload = payload or {}
    return GraphOptions(
        departments=_text_set(payload.get("departments"), "departments"),
        locations=frozenset(
            loc.lower() for loc in _text_set(payload.get("location"), "location")
        ),
        include_raws=_flag(payload.get("includeRaws"), "includeRaws"),
        include_grades=_flag(payload.get("includeGrades"), "includeGrades"),
        taken=_text_set(payload.get("taken"), "taken"),
    )
