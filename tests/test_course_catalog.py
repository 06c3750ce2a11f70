import pandas as pd

from models.catalog_course import CatalogCourse
from seed_catalog_db import seed_catalog
from utils.course_catalog import CatalogEntry, build_resolver, load_catalog


CSV_TEXT = (
    "code,name,credits,prerequisites\n"
    "CSC108H1,Introduction to Computer Programming,0.5,\n"
    "CSC148H1,Introduction to Computer Science,0.5,CSC108H1 + CSC104H1\n"
    ",missing code,0.5,\n"
    "CSC104H1,Computational Thinking,n/a,\n"
)


def test_load_catalog_missing_directory(tmp_path):
    assert load_catalog(str(tmp_path / "nope")) == []


def test_load_csv_catalog(tmp_path):
    (tmp_path / "courses.csv").write_text(CSV_TEXT, encoding="utf-8")
    catalog = load_catalog(str(tmp_path))

    assert [c.code for c in catalog] == ["CSC104H1", "CSC108H1", "CSC148H1"]
    by_code = {c.code: c for c in catalog}
    assert by_code["CSC148H1"].prereq_text == "CSC108H1 + CSC104H1"
    assert by_code["CSC148H1"].credits == 0.5
    assert by_code["CSC108H1"].prereq_text is None
    assert by_code["CSC104H1"].credits is None


def test_load_xlsx_catalog(tmp_path):
    df = pd.DataFrame(
        [
            {"Code": "MAT137Y1", "Name": "Calculus with Proofs", "Credits": 1.0, "Prerequisites": None},
            {"Code": "MAT237Y1", "Name": "Multivariable Calculus", "Credits": 1.0, "Prerequisites": "MAT137Y1"},
        ]
    )
    df.to_excel(tmp_path / "math.xlsx", index=False)

    catalog = load_catalog(str(tmp_path))
    assert catalog == [
        CatalogEntry(code="MAT137Y1", name="Calculus with Proofs", credits=1.0, prereq_text=None),
        CatalogEntry(code="MAT237Y1", name="Multivariable Calculus", credits=1.0, prereq_text="MAT137Y1"),
    ]


def test_build_resolver():
    entries = [CatalogEntry(code="CSC108H1", name="Introduction to Computer Programming")]
    resolve = build_resolver(entries)
    assert resolve("csc108h1") == "CSC108H1"
    assert resolve("Introduction  to Computer Programming") == "CSC108H1"
    assert resolve("") is None
    assert resolve("CSC148H1") is None


def test_seed_catalog_inserts_then_updates(app, tmp_path):
    (tmp_path / "courses.csv").write_text(
        "code,name,credits,prerequisites\n"
        "STA247H1,Probability with Computer Applications,0.5,MAT137Y1\n"
        "CSC108H1,Intro Programming (renamed),0.5,\n",
        encoding="utf-8",
    )

    inserted, updated = seed_catalog(str(tmp_path))
    assert (inserted, updated) == (1, 1)
    assert CatalogCourse.query.filter_by(code="STA247H1").one().prereq_text == "MAT137Y1"
    assert CatalogCourse.query.filter_by(code="CSC108H1").one().name == "Intro Programming (renamed)"

    assert seed_catalog(str(tmp_path)) == (0, 2)
