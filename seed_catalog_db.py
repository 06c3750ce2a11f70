from app import create_app
from extensions import db
from models.catalog_course import CatalogCourse
from utils.course_catalog import load_catalog


def seed_catalog(directory: str) -> tuple[int, int]:
    catalog = load_catalog(directory)

    inserted = 0
    updated = 0

    for c in catalog:
        existing = CatalogCourse.query.filter_by(code=c.code).first()
        if existing:
            # catalog files are the source of truth: refresh text + credits
            existing.name = c.name
            existing.credits = c.credits
            existing.prereq_text = c.prereq_text
            updated += 1
            continue

        db.session.add(
            CatalogCourse(
                code=c.code,
                name=c.name,
                credits=c.credits,
                prereq_text=c.prereq_text,
            )
        )
        inserted += 1

    db.session.commit()
    return inserted, updated


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        inserted, updated = seed_catalog(app.config["CATALOG_DIR"])
        print(f"Catalog seed complete: {inserted} inserted, {updated} updated")
