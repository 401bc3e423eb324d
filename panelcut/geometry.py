"""Edge algebra, overlap cancellation, and closed-loop reconstruction.

All comparisons are exact float comparisons. Cancellation and loop closing
both rely on coordinates produced by earlier arithmetic matching bit for bit.
"""
from collections.abc import Iterable, Sequence

from .types import Point, Edge, Loop, BBox

# ============================================================
# Error Types
# ============================================================
class GeometryError(ValueError):
    """Raised for invalid geometry queries."""

class InvalidSide(GeometryError):
    """Side name outside top/right/bottom/left."""

class InvalidAnchor(GeometryError):
    """Anchor name outside the nine rectangle anchors."""

# ============================================================
# Edge Algebra
# ============================================================
def same_edge(a: Edge, b: Edge) -> bool:
    """True if a and b join the same two points, in either direction."""
    return (a.start == b.start and a.end == b.end) or (a.start == b.end and a.end == b.start)

def subtract_edge(edge: Edge, other: Edge) -> list[Edge]:
    """Remove the colinear overlap of *other* from *edge*.

    Returns 0, 1 or 2 edges. Only pairs that are both horizontal on the same Y
    or both vertical on the same X are trimmed; everything else comes back as
    [edge]. Endpoints that merely touch do not count as overlap. Residual
    pieces run in ascending coordinate order.
    """
    horizontal = edge.is_horizontal and other.is_horizontal
    vertical = edge.is_vertical and other.is_vertical
    if not horizontal and not vertical:
        return [edge]
    if horizontal and edge.start.y != other.start.y:
        return [edge]
    if not horizontal and edge.start.x != other.start.x:
        return [edge]

    axis = 0 if horizontal else 1
    a_start, a_end = sorted((edge.start[axis], edge.end[axis]))
    b_start, b_end = sorted((other.start[axis], other.end[axis]))
    if b_end <= a_start or b_start >= a_end:
        return [edge]

    fixed = edge.start[1 - axis]
    def _on_axis(v: float) -> Point:
        return Point(v, fixed) if horizontal else Point(fixed, v)

    overlap_start = max(a_start, b_start)
    overlap_end = min(a_end, b_end)
    result = []
    if overlap_start > a_start:
        result.append(Edge(_on_axis(a_start), _on_axis(overlap_start)))
    if overlap_end < a_end:
        result.append(Edge(_on_axis(overlap_end), _on_axis(a_end)))
    return result

def distributed_points(
    edge: Edge, count: int,
    start_margin: float = 0.0, end_margin: float = 0.0,
    include_endpoints: bool = False,
) -> list[Point]:
    """Evenly spaced points along *edge* between the two margins.

    include_endpoints=True puts the first/last point on the margin boundaries;
    otherwise all points sit strictly inside them. If the usable length is not
    positive, or count == 1, a single point at the middle of the usable span
    is returned.
    """
    if count <= 0:
        return []
    dx = edge.end.x - edge.start.x; dy = edge.end.y - edge.start.y
    total = edge.length
    if total == 0:
        return [edge.start]
    usable = total - start_margin - end_margin

    def _at(dist: float) -> Point:
        return Point(edge.start.x + dx*(dist/total), edge.start.y + dy*(dist/total))

    if usable <= 0 or count == 1:
        return [_at(start_margin + usable/2)]
    if include_endpoints:
        ts = [i/(count-1) for i in range(count)]
    else:
        ts = [(i+1)/(count+1) for i in range(count)]
    return [_at(start_margin + t*usable) for t in ts]

def _whittle(fragments: list[Edge], cutter: Edge) -> list[Edge]:
    out = []
    for frag in fragments:
        out.extend(subtract_edge(frag, cutter))
    return out

# ============================================================
# Edge Combination
# ============================================================
def combine_edges(edge_lists: Iterable[Sequence[Edge]], symmetrical: bool = False) -> list[Edge]:
    """Merge several edge lists, cancelling colinear overlaps.

    Ordered (symmetrical=False): each list is cut against everything accepted
    before it, so earlier lists keep shared boundaries and later ones lose them.
    Symmetrical: every edge is cut by every other edge, so a shared boundary
    disappears from both sides and input order does not change the result.
    """
    if symmetrical:
        return _combine_symmetrical(edge_lists)
    return _combine_ordered(edge_lists)

def _combine_ordered(edge_lists: Iterable[Sequence[Edge]]) -> list[Edge]:
    accepted: list[Edge] = []
    for edges in edge_lists:
        for edge in edges:
            to_add = [edge]
            for prior in accepted:
                to_add = _whittle(to_add, prior)
            accepted.extend(to_add)
    return accepted

def _combine_symmetrical(edge_lists: Iterable[Sequence[Edge]]) -> list[Edge]:
    originals = [e for edges in edge_lists for e in edges]
    fragments: list[Edge] = []
    for i, edge in enumerate(originals):
        pieces = [edge]
        for j, cutter in enumerate(originals):
            if i == j:
                continue
            pieces = _whittle(pieces, cutter)
        fragments.extend(pieces)
    return fragments

# ============================================================
# Closed Loop Reconstruction
# ============================================================
def closed_paths(edges: Sequence[Edge]) -> list[Loop]:
    """Walk an unordered edge collection into point loops.

    Greedy: start from the first unused edge, follow the first unused incident
    edge at each vertex (insertion order) until the walk returns to its start
    or runs out. The repeated start point is dropped, so each loop is closed
    implicitly. At vertices with more than two edges the split into loops
    depends on edge order; open chains come back as open point lists.
    """
    incident: dict[Point, list[int]] = {}
    for idx, edge in enumerate(edges):
        incident.setdefault(edge.start, []).append(idx)
        incident.setdefault(edge.end, []).append(idx)

    used = [False] * len(edges)
    loops: list[Loop] = []
    next_start = 0
    while True:
        while next_start < len(edges) and used[next_start]:
            next_start += 1
        if next_start >= len(edges):
            break
        first = edges[next_start]
        used[next_start] = True
        anchor, cursor = first.start, first.end
        loop = [anchor]
        while True:
            loop.append(cursor)
            if cursor == anchor:
                break
            step = None
            for idx in incident[cursor]:
                if used[idx]:
                    continue
                cand = edges[idx]
                other = cand.end if cand.start == cursor else cand.start
                if other != cursor:
                    step = idx, other
                    break
            if step is None:
                break
            used[step[0]] = True
            cursor = step[1]
        if len(loop) > 2 and loop[-1] == loop[0]:
            loop.pop()
        loops.append(loop)
    return loops

# ============================================================
# Bounding Box / Translation
# ============================================================
def edges_bbox(edges: Iterable[Edge]) -> BBox | None:
    """(min_x, min_y, max_x, max_y) over all edge endpoints, or None if empty."""
    xs = []; ys = []
    for e in edges:
        xs += (e.start.x, e.end.x); ys += (e.start.y, e.end.y)
    if not xs:
        return None
    return min(xs), min(ys), max(xs), max(ys)

def translate_edges(edges: Iterable[Edge], dx: float, dy: float) -> list[Edge]:
    return [e.offset(dx, dy) for e in edges]
