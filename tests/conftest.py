import pytest

from app import create_app
from extensions import db
from models.catalog_course import CatalogCourse


class _TestingConfig:
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CATALOG_DIR = ""


CATALOG_ROWS = [
    ("CSC104H1", "Computational Thinking", None),
    ("CSC108H1", "Introduction to Computer Programming", None),
    ("CSC148H1", "Introduction to Computer Science", "CSC108H1 + CSC104H1"),
    ("CSC165H1", "Mathematical Expression and Reasoning", None),
    ("CSC236H1", "Introduction to the Theory of Computation", "CSC148H1 + CSC165H1"),
    ("MAT137Y1", "Calculus with Proofs", None),
    ("MAT237Y1", "Multivariable Calculus with Proofs", "MAT137Y1 (55%)"),
]


@pytest.fixture
def app():
    app = create_app(_TestingConfig)
    with app.app_context():
        db.create_all()
        for code, name, prereq in CATALOG_ROWS:
            db.session.add(CatalogCourse(code=code, name=name, credits=0.5, prereq_text=prereq))
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
