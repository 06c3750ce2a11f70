from app import create_app
from extensions import db
from models.catalog_course import CatalogCourse  # noqa: F401  (table to create)

app = create_app()

with app.app_context():
    print("DB URI:", app.config["SQLALCHEMY_DATABASE_URI"])
    db.create_all()
    print("DB CREATED")
