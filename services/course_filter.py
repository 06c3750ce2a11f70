from __future__ import annotations

from services.graph_options import GraphOptions, LOCATION_CODES


def pick_course(options: GraphOptions, name: str) -> bool:
    return pick_course_by_department(options, name) and pick_course_by_location(options, name)


def pick_course_by_department(options: GraphOptions, name: str) -> bool:
    if not options.departments:
        return True
    return any(name.startswith(prefix) for prefix in options.departments)


def pick_course_by_location(options: GraphOptions, name: str) -> bool:
    if not options.locations:
        return True
    # Unknown locations map to None and never match
    wanted = {LOCATION_CODES.get(loc) for loc in options.locations}
    return name[-1:] in wanted
