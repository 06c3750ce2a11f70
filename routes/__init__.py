from flask import Blueprint

# prerequisite graph endpoints
graph_bp = Blueprint("graph", __name__, url_prefix="/graph")

from . import graphs    # noqa: F401
