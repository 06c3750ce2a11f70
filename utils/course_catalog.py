from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import csv
import logging
import re
from typing import Callable, Optional

import pandas as pd

logger = logging.getLogger(__name__)


# File-level catalog row (not a DB model)
@dataclass(frozen=True)
class CatalogEntry:
    code: str
    name: str
    credits: float | None = None

    # raw catalog text, parsed into a requirement tree on demand
    prereq_text: str | None = None


def normalize_name_key(s: str) -> str:
    s = str(s or "").strip()
    s = s.replace('"', "").replace("'", "")
    s = re.sub(r"\s+", " ", s)
    return s


def _parse_credits(raw) -> float | None:
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return None
    s = str(raw).strip()
    if not s:
        return None
    try:
        return float(s)
    except ValueError:
        return None


def load_catalog(directory: str) -> list[CatalogEntry]:
    p = Path(directory)
    if not p.exists() or not p.is_dir():
        return []

    items: list[CatalogEntry] = []

    for f in sorted(p.glob("*.xlsx")):
        try:
            items.extend(_load_xlsx_catalog(f))
        except Exception as e:
            logger.warning("Skipping catalog file %s: %s", f.name, e)

    for f in sorted(p.glob("*.csv")):
        try:
            items.extend(_load_csv_catalog(f))
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            logger.warning("Skipping catalog file %s: %s", f.name, e)

    # De-dup
    uniq = {(c.code, c.name): c for c in items}
    out = list(uniq.values())
    out.sort(key=lambda c: (c.code, c.name))
    return out


def _load_csv_catalog(f: Path) -> list[CatalogEntry]:
    items: list[CatalogEntry] = []
    with f.open(newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            code = (row.get("code") or row.get("Code") or "").strip()
            name = (row.get("name") or row.get("Name") or "").strip()
            prereq = (row.get("prerequisites") or row.get("Prerequisites") or "").strip()

            if not code or not name:
                continue

            items.append(
                CatalogEntry(
                    code=code,
                    name=name,
                    credits=_parse_credits(row.get("credits") or row.get("Credits")),
                    prereq_text=prereq or None,
                )
            )
    return items


def _load_xlsx_catalog(f: Path) -> list[CatalogEntry]:
    df = pd.read_excel(f)
    df.columns = [str(c).strip().lower() for c in df.columns]
    items: list[CatalogEntry] = []

    def get_text(r, col: str) -> str | None:
        v = r.get(col)
        if v is None or (isinstance(v, float) and pd.isna(v)):
            return None
        s = normalize_name_key(v)
        return s if s else None

    for _, r in df.iterrows():
        code = get_text(r, "code")
        name = get_text(r, "name")

        if not code or not name:
            continue

        items.append(
            CatalogEntry(
                code=code,
                name=name,
                credits=_parse_credits(r.get("credits")),
                prereq_text=get_text(r, "prerequisites"),
            )
        )

    return items


def build_resolver(catalog_courses) -> Callable[[str], Optional[str]]:
    """
    resolve(token) -> catalog course code | None

    Matches by code (case-insensitive) first, then by exact course name.
    """
    by_code = {str(c.code).strip().upper(): str(c.code).strip() for c in catalog_courses}
    by_name = {normalize_name_key(c.name): str(c.code).strip() for c in catalog_courses}

    def resolve(token: str) -> Optional[str]:
        t = normalize_name_key(token)
        if not t:
            return None
        code = by_code.get(t.upper())
        if code is not None:
            return code
        return by_name.get(t)

    return resolve
