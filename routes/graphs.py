"""Prerequisite graph endpoints

- POST /graph               builds the graph for the posted courses, returns DOT source
- GET  /graph/sample        fixed example graph as DOT
- GET  /graph/profile-hash  fingerprint of the graph style settings
"""

from flask import Response, abort, current_app, jsonify, request

from . import graph_bp
from models.catalog_course import CatalogCourse
from services.course_finder import requirements_from_catalog
from services.dot_graph import dot_source
from services.graph_generator import courses_to_prereq_graph, graph_profile_hash, sample_graph
from services.graph_options import options_from_payload
from utils.course_catalog import build_resolver

DOT_MIMETYPE = "text/vnd.graphviz"


def _requested_courses(payload: dict) -> list[str]:
    courses = payload.get("courses")
    if isinstance(courses, str):
        courses = courses.split(",")
    if not isinstance(courses, list) or not all(isinstance(c, str) for c in courses):
        abort(400, description='"courses" must be a list of course codes.')
    courses = [c.strip() for c in courses if c.strip()]
    if not courses:
        abort(400, description="At least one course is required.")
    return courses


@graph_bp.route("", methods=["POST"])
def create_graph():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Expected a JSON object body.")

    courses = _requested_courses(payload)

    try:
        options = options_from_payload(payload)
    except ValueError as e:
        abort(400, description=str(e))

    catalog = CatalogCourse.query.all()
    requirements = requirements_from_catalog(catalog, build_resolver(catalog))

    try:
        graph = courses_to_prereq_graph(courses, options, requirements=requirements)
    except ValueError as e:
        # unknown root course(s)
        abort(400, description=str(e))

    current_app.logger.info(
        "Built prerequisite graph for %s: %d nodes, %d edges",
        ",".join(courses), len(graph.nodes), len(graph.edges),
    )

    return jsonify(
        {
            "dot": dot_source(graph),
            "nodes": len(graph.nodes),
            "edges": len(graph.edges),
            "profile_hash": graph_profile_hash(),
        }
    )


@graph_bp.route("/sample")
def sample():
    return Response(dot_source(sample_graph()), mimetype=DOT_MIMETYPE)


@graph_bp.route("/profile-hash")
def profile_hash():
    return jsonify({"profile_hash": graph_profile_hash()})
