from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from services.course_filter import pick_course_by_department
from services.graph_options import GraphOptions
from services.req_ir import Req, ReqNone, prereq_course_codes
from utils.req_parser import parse_req_text

logger = logging.getLogger(__name__)


def requirements_from_catalog(
    entries: Iterable,
    resolve: Optional[Callable[[str], Optional[str]]] = None,
) -> Dict[str, Req]:
    """
    Parse every catalog entry's prereq_text into a requirement tree.

    Works with anything exposing `code` and `prereq_text` (CatalogEntry rows
    loaded from files, or CatalogCourse DB rows).
    """
    out: Dict[str, Req] = {}
    for entry in entries:
        code = (getattr(entry, "code", None) or "").strip()
        if not code:
            continue
        out[code] = parse_req_text(getattr(entry, "prereq_text", None) or "", resolve)
    return out


def lookup_courses(
    options: GraphOptions,
    root_courses: Sequence[str],
    requirements: Mapping[str, Req],
) -> Dict[str, Req]:
    """
    Expand root courses into a course -> requirement map covering every
    transitive prerequisite.

    - unknown root course: ValueError
    - unknown prerequisite course: kept with ReqNone
    - taken courses are kept with ReqNone, so nothing below them is drawn
    - courses outside the department filter are kept, but their own
      prerequisites are not followed
    """
    roots = [c.strip() for c in root_courses if c and c.strip()]
    if not roots:
        raise ValueError("At least one course is required to build a graph.")

    missing = [c for c in roots if c not in requirements]
    if missing:
        raise ValueError(f"Unknown course(s): {', '.join(sorted(set(missing)))}")

    found: Dict[str, Req] = {}
    queue = deque(roots)
    while queue:
        code = queue.popleft()
        if code in found:
            continue

        if code in options.taken:
            found[code] = ReqNone()
            continue

        req = requirements.get(code)
        if req is None:
            logger.debug("No catalog entry for prerequisite %s", code)
            req = ReqNone()
        found[code] = req

        if not pick_course_by_department(options, code):
            continue
        for prereq in prereq_course_codes(req):
            if prereq not in found:
                queue.append(prereq)

    return found
