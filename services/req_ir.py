from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple, Union


@dataclass(frozen=True)
class ReqNone:
    pass


@dataclass(frozen=True)
class ReqCourse:
    code: str
    # Minimum grade as written in the catalog ("" when absent). Not drawn.
    grade: str = ""


@dataclass(frozen=True)
class ReqAnd:
    items: Tuple["Req", ...]


@dataclass(frozen=True)
class ReqOr:
    items: Tuple["Req", ...]


@dataclass(frozen=True)
class ReqGrade:
    description: str
    req: "Req"


@dataclass(frozen=True)
class ReqRaw:
    # Prerequisite text that could not be resolved to courses
    text: str


@dataclass(frozen=True)
class ReqCredits:
    amount: str
    req: "Req"


Req = Union[ReqNone, ReqCourse, ReqAnd, ReqOr, ReqGrade, ReqRaw, ReqCredits]


def prereq_course_codes(req: Req) -> Iterator[str]:
    """Yield every course code referenced anywhere in the tree, left to right."""
    if isinstance(req, ReqCourse):
        yield req.code
    elif isinstance(req, (ReqAnd, ReqOr)):
        for child in req.items:
            yield from prereq_course_codes(child)
    elif isinstance(req, (ReqGrade, ReqCredits)):
        yield from prereq_course_codes(req.req)
