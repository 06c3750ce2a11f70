from extensions import db

class CatalogCourse(db.Model):
    __tablename__ = "catalog_courses"

    id = db.Column(db.Integer, primary_key=True)

    # Course code as printed in the calendar, e.g. "CSC148H1" (last char = campus)
    code = db.Column(db.String(32), unique=True, index=True, nullable=False)

    name = db.Column(db.String(255), nullable=False)

    credits = db.Column(db.Float, nullable=True)

    # Unparsed prerequisite string; parsed per request into a requirement tree
    prereq_text = db.Column(db.Text, nullable=True)

    def __repr__(self) -> str:
        return f"<CatalogCourse {self.code} {self.name}>"
