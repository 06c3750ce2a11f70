from __future__ import annotations
import re
from typing import Callable, Optional

from services.req_ir import (
    Req,
    ReqNone,
    ReqCourse,
    ReqAnd,
    ReqOr,
    ReqGrade,
    ReqRaw,
    ReqCredits,
)

Resolver = Callable[[str], Optional[str]]

# Catalog-style course code, e.g. "CSC148H1"
COURSE_CODE_RE = re.compile(r"^[A-Z]{3}\d{3}[A-Z]\d$")

# "CSC148H1 (70%)" / "CSC148H1 (B+)"
GRADE_RE = re.compile(r"^(?P<course>.+?)\s*\((?P<grade>[^()]+)\)$")

# "at least 4.0 credits" / "8 credits including MAT137H1"
CREDITS_RE = re.compile(
    r"^(?:at least\s+)?(?P<amount>\d+(?:\.\d+)?)\s+credits?(?:\s+including\s+(?P<inner>.+))?$",
    re.IGNORECASE,
)


def normalize_text(s: str) -> str:
    s = s.strip()
    s = s.replace("–", "-")
    s = re.sub(r"\s+", " ", s)
    return s


def split_top(s: str, sep: str) -> list[str]:
    # separators inside "(...)" belong to a grade, e.g. "CSC148H1 (B+)"
    parts: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(s):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        elif ch == sep and depth == 0:
            parts.append(s[start:i])
            start = i + 1
    parts.append(s[start:])
    return [p.strip() for p in parts if p.strip()]


def default_resolve(token: str) -> Optional[str]:
    t = normalize_text(token).upper()
    return t if COURSE_CODE_RE.match(t) else None


def _is_valid_split_item(node: Req) -> bool:
    """
    Split is 'valid' only if the resulting subtree contains no raw (unresolved) leaves.
    """
    if isinstance(node, ReqRaw):
        return False

    if isinstance(node, (ReqAnd, ReqOr)):
        return all(_is_valid_split_item(child) for child in node.items)

    if isinstance(node, (ReqGrade, ReqCredits)):
        return _is_valid_split_item(node.req)

    return True


def parse_req_text(text: str, resolve: Optional[Resolver] = None) -> Req:
    """
    Parse catalog prerequisite text into a requirement tree.

    resolve(token: str) -> course code | None
    Tokens that do not resolve are kept verbatim as ReqRaw.
    """
    if not text or not text.strip():
        return ReqNone()
    resolve = resolve or default_resolve
    text = normalize_text(text)

    # OR level
    if "/" in text:
        parts = split_top(text, "/")
        if parts != [text]:
            items = [parse_req_text(p, resolve) for p in parts]

            if all(_is_valid_split_item(item) for item in items):
                items = dedupe(items)
                return items[0] if len(items) == 1 else ReqOr(tuple(items))

    # AND level
    if "+" in text:
        parts = split_top(text, "+")
        if parts != [text]:
            items = [parse_req_text(p, resolve) for p in parts]

            if all(_is_valid_split_item(item) for item in items):
                items = dedupe(items)
                return items[0] if len(items) == 1 else ReqAnd(tuple(items))

    return _parse_leaf(text, resolve)


def _parse_leaf(text: str, resolve: Resolver) -> Req:
    m = CREDITS_RE.match(text)
    if m:
        inner = m.group("inner")
        return ReqCredits(
            amount=m.group("amount"),
            req=parse_req_text(inner, resolve) if inner else ReqNone(),
        )

    m = GRADE_RE.match(text)
    if m:
        code = resolve(m.group("course"))
        if code is not None:
            grade = m.group("grade").strip()
            return ReqGrade(description=grade, req=ReqCourse(code=code, grade=grade))

    code = resolve(text)
    if code is not None:
        return ReqCourse(code=code)

    return ReqRaw(text=text)


def dedupe(items: list[Req]) -> list[Req]:
    seen = set()
    out = []
    for it in items:
        if it in seen:
            continue
        seen.add(it)
        out.append(it)
    return out
