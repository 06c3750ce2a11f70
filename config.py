import os


# Absolute path to project root
# (a stable anchor for all file paths)
basedir = os.path.abspath(os.path.dirname(__file__))

# Runtime only directory (DB)
instance_dir = os.path.join(basedir, "instance")

class Config:
    SECRET_KEY = "dev-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(instance_dir, "app.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Course catalog files (CSV + xlsx) with code, name, credits, prerequisites columns
    CATALOG_DIR = os.path.join(basedir, "data_catalog")
