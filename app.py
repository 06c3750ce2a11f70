import os

from flask import Flask
from config import Config, instance_dir
from extensions import db

def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # sqlite needs the instance folder to exist
    os.makedirs(instance_dir, exist_ok=True)

    # init extentions
    db.init_app(app)

    # import and register blueprints
    from routes import graph_bp

    app.register_blueprint(graph_bp)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
