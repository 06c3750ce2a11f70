from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from services.course_filter import pick_course
from services.course_finder import lookup_courses
from services.dot_graph import (
    Attributes,
    DotEdge,
    DotGraph,
    DotNode,
    DotStatement,
    GlobalAttributes,
)
from services.graph_options import GraphOptions, default_graph_options
from services.req_ir import (
    Req,
    ReqNone,
    ReqCourse,
    ReqAnd,
    ReqOr,
    ReqGrade,
    ReqRaw,
    ReqCredits,
)

logger = logging.getLogger(__name__)


# -----------------------------
# Graphviz configuration
# -----------------------------

GRAPH_ATTRS = GlobalAttributes(
    "graph",
    (
        ("rankdir", "TB"),
        ("splines", "ortho"),
        ("concentrate", "false"),
    ),
)

NODE_ATTRS = GlobalAttributes(
    "node",
    (
        ("shape", "box"),
        ("fixedsize", "false"),
        ("style", "filled"),
    ),
)

# boolean gates are drawn as small unfilled ellipses
ELLIPSE_ATTRS: Attributes = (
    ("shape", "ellipse"),
    ("width", "0.2"),
    ("height", "0.15"),
    ("fixedsize", "true"),
    ("fillcolor", "white"),
    ("fontsize", "6.0"),
)

EDGE_ATTRS = GlobalAttributes("edge", (("arrowhead", "normal"),))


def build_graph(statements: Iterable[DotStatement]) -> DotGraph:
    """
    Wrap node/edge statements with the fixed global attributes.

    The graph is directed and not strict: two different gates may connect the
    same pair of node ids. Statements are passed through unchecked.
    """
    return DotGraph(
        strict=False,
        directed=True,
        graph_id=None,
        statements=(GRAPH_ATTRS, NODE_ATTRS, EDGE_ATTRS, *statements),
    )


@lru_cache(maxsize=1)
def graph_profile_hash() -> str:
    """Fingerprint of the static style configuration (not of any graph data)."""
    profile = repr((build_graph([]), ELLIPSE_ATTRS))
    return hashlib.md5(profile.encode("utf-8")).hexdigest()


# -----------------------------
# Node / edge factory
# -----------------------------

@dataclass
class GeneratorState:
    counter: int = 0
    nodes: Dict[str, DotNode] = field(default_factory=dict)


def _with_counter(text: str, counter: int) -> str:
    return f"{text}_counter_{counter}"


def make_node(state: GeneratorState, name: str) -> DotNode:
    existing = state.nodes.get(name)
    if existing is not None:
        return existing

    node_id = _with_counter(name, state.counter)
    node = DotNode(node_id, (("label", name), ("id", node_id)))
    state.nodes[name] = node
    state.counter += 1
    return node


def make_bool(state: GeneratorState, text: str) -> DotNode:
    # Never memoized: every AND/OR site is its own node
    node_id = _with_counter(text, state.counter)
    state.counter += 1
    return DotNode(node_id, (("label", text), ("id", node_id)) + ELLIPSE_ATTRS)


def make_edge(from_id: str, to_id: str) -> DotEdge:
    return DotEdge(from_id, to_id, (("id", f"{from_id}|{to_id}"),))


# -----------------------------
# Requirement -> statements
# -----------------------------

def _at_least_two_course_reqs(reqs: Sequence[Req]) -> bool:
    return sum(1 for r in reqs if not isinstance(r, (ReqRaw, ReqNone))) > 1


def _bool_to_stmts(
    state: GeneratorState,
    options: GraphOptions,
    parent_id: str,
    label: str,
    reqs: Sequence[Req],
) -> List[DotStatement]:
    if options.include_raws or _at_least_two_course_reqs(reqs):
        gate = make_bool(state, label)
        edge = make_edge(gate.node_id, parent_id)
        merged: List[DotStatement] = []
        for child in reqs:
            merged.extend(req_to_stmts(state, options, gate.node_id, child))
        # Checked after recursing: a gate left with one child or less is dropped
        if len(merged) > 1:
            return [gate, edge] + merged
        return []

    flattened: List[DotStatement] = []
    for child in reqs:
        flattened.extend(req_to_stmts(state, options, parent_id, child))
    return flattened


def req_to_stmts(
    state: GeneratorState,
    options: GraphOptions,
    parent_id: str,
    req: Req,
) -> List[DotStatement]:
    """
    Statements for `req` hanging off the node `parent_id`.

    Each materialized requirement contributes its node followed by the edge to
    its parent; children are visited left to right.
    """
    if isinstance(req, ReqNone):
        return []

    if isinstance(req, ReqCourse):
        if not pick_course(options, req.code):
            return []
        prereq = make_node(state, req.code)
        return [prereq, make_edge(prereq.node_id, parent_id)]

    if isinstance(req, ReqAnd):
        return _bool_to_stmts(state, options, parent_id, "and", req.items)

    if isinstance(req, ReqOr):
        return _bool_to_stmts(state, options, parent_id, "or", req.items)

    if isinstance(req, ReqGrade):
        if not options.include_grades:
            return req_to_stmts(state, options, parent_id, req.req)
        grade_node = make_node(state, req.description)
        edge = make_edge(grade_node.node_id, parent_id)
        return [grade_node, edge] + req_to_stmts(state, options, grade_node.node_id, req.req)

    if isinstance(req, ReqRaw):
        text = req.text
        if not options.include_raws or not text or "High school" in text:
            return []
        prereq = make_node(state, text)
        return [prereq, make_edge(prereq.node_id, parent_id)]

    if isinstance(req, ReqCredits):
        credit_node = make_node(state, f"at least {req.amount} credits")
        edge = make_edge(credit_node.node_id, parent_id)
        return [credit_node, edge] + req_to_stmts(state, options, credit_node.node_id, req.req)

    raise TypeError(f"Unknown requirement type: {type(req).__name__}")


def course_to_stmts(
    state: GeneratorState,
    options: GraphOptions,
    name: str,
    req: Req,
) -> List[DotStatement]:
    if not pick_course(options, name):
        return []
    node = make_node(state, name)
    return [node] + req_to_stmts(state, options, node.node_id, req)


def unique_statements(statements: Iterable[DotStatement]) -> List[DotStatement]:
    seen: set = set()
    out: List[DotStatement] = []
    for stmt in statements:
        if stmt in seen:
            continue
        seen.add(stmt)
        out.append(stmt)
    return out


def reqs_to_graph(options: GraphOptions, reqs: Iterable[Tuple[str, Req]]) -> DotGraph:
    """
    Convert (course code, requirement) pairs into a DotGraph.

    One GeneratorState is used for the whole call, so a course referenced from
    several places becomes a single node. Identical statements produced by
    different roots (a shared prerequisite edge, say) are kept once.
    """
    state = GeneratorState()
    all_stmts: List[DotStatement] = []
    for name, req in reqs:
        all_stmts.extend(course_to_stmts(state, options, name, req))

    stmts = unique_statements(all_stmts)
    logger.debug("Generated %d statements (%d nodes created)", len(stmts), state.counter)
    return build_graph(stmts)


def courses_to_prereq_graph(
    root_courses: Sequence[str],
    options: Optional[GraphOptions] = None,
    *,
    requirements: Mapping[str, Req],
) -> DotGraph:
    """
    Dependency graph of `root_courses` and everything they transitively require.

    `requirements` is the full course -> requirement table the roots are looked
    up in. Raises ValueError for an empty root list or an unknown root course.
    """
    options = options or default_graph_options()
    reqs = lookup_courses(options, root_courses, requirements)
    return reqs_to_graph(options, sorted(reqs.items()))


def sample_graph() -> DotGraph:
    return reqs_to_graph(
        default_graph_options(),
        [
            ("MAT237H1", ReqCourse("MAT137H1")),
            ("MAT133H1", ReqNone()),
            ("CSC148H1", ReqAnd((ReqCourse("CSC108H1"), ReqCourse("CSC104H1")))),
            ("CSC265H1", ReqAnd((ReqCourse("CSC148H1"), ReqCourse("CSC236H1")))),
        ],
    )
