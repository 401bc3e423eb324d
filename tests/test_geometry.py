"""Tests for panelcut/geometry.py edge algebra and loop reconstruction."""
import itertools
import pytest
from panelcut.types import Point, Edge
from panelcut.geometry import (
    same_edge, subtract_edge, distributed_points,
    combine_edges, closed_paths, edges_bbox, translate_edges,
)


def _e(x1, y1, x2, y2):
    return Edge(Point(x1, y1), Point(x2, y2))


# --- Point / Edge values ---

def test_point_equality_is_by_value():
    assert Point(1.5, 2.0) == Point(1.5, 2.0)
    assert hash(Point(1.5, 2.0)) == hash(Point(1.5, 2.0))
    assert Point(0.1 + 0.2, 0) != Point(0.3, 0)


def test_edge_is_directional():
    assert _e(0, 0, 10, 0) != _e(10, 0, 0, 0)
    assert same_edge(_e(0, 0, 10, 0), _e(10, 0, 0, 0))
    assert not same_edge(_e(0, 0, 10, 0), _e(0, 0, 5, 0))


def test_edge_copy_equal_but_distinct():
    e = _e(1, 2, 3, 4)
    c = e.copy()
    assert c == e
    assert c.start is not e.start


def test_edge_str():
    assert str(_e(0, 0, 10, 0)) == "Edge: (0, 0) -> (10, 0)"


# --- subtract_edge ---

def test_subtract_no_overlap_returns_self():
    edge = _e(0, 0, 10, 0)
    assert subtract_edge(edge, _e(20, 0, 30, 0)) == [edge]


def test_subtract_exact_match_returns_empty():
    assert subtract_edge(_e(0, 0, 10, 0), _e(0, 0, 10, 0)) == []


def test_subtract_reverse_match_returns_empty():
    assert subtract_edge(_e(0, 0, 10, 0), _e(10, 0, 0, 0)) == []


def test_subtract_partial_overlap():
    assert subtract_edge(_e(0, 0, 10, 0), _e(5, 0, 15, 0)) == [_e(0, 0, 5, 0)]


def test_subtract_contained_overlap_two_segments():
    result = subtract_edge(_e(0, 0, 10, 0), _e(3, 0, 7, 0))
    assert result == [_e(0, 0, 3, 0), _e(7, 0, 10, 0)]


def test_subtract_is_antisymmetric():
    a = _e(0, 0, 10, 0)
    b = _e(5, 0, 15, 0)
    assert subtract_edge(a, b) == [_e(0, 0, 5, 0)]
    assert subtract_edge(b, a) == [_e(10, 0, 15, 0)]


def test_subtract_touching_endpoints_do_not_cancel():
    edge = _e(0, 0, 10, 0)
    assert subtract_edge(edge, _e(10, 0, 20, 0)) == [edge]
    assert subtract_edge(edge, _e(-5, 0, 0, 0)) == [edge]


def test_subtract_vertical():
    result = subtract_edge(_e(4, 10, 4, 0), _e(4, 2, 4, 6))
    assert result == [_e(4, 0, 4, 2), _e(4, 6, 4, 10)]


def test_subtract_reversed_edge_residuals_ascend():
    assert subtract_edge(_e(10, 0, 0, 0), _e(0, 0, 4, 0)) == [_e(4, 0, 10, 0)]


@pytest.mark.parametrize("other", [
    _e(0, 1, 10, 1),      # parallel, different y
    _e(5, -5, 5, 5),      # perpendicular
    _e(0, 0, 10, 10),     # diagonal
])
def test_subtract_non_colinear_unchanged(other):
    edge = _e(0, 0, 10, 0)
    assert subtract_edge(edge, other) == [edge]


def test_subtract_vertical_different_x_unchanged():
    edge = _e(0, 0, 0, 10)
    assert subtract_edge(edge, _e(5, 0, 5, 10)) == [edge]
    assert subtract_edge(edge, _e(5, 2, 5, 4)) == [edge]


def test_subtract_diagonal_edge_never_trimmed():
    diag = _e(0, 0, 10, 10)
    assert subtract_edge(diag, diag) == [diag]


@pytest.mark.parametrize("other", [
    _e(2, 0, 5, 0), _e(-3, 0, 4, 0), _e(6, 0, 30, 0), _e(-1, 0, 11, 0),
])
def test_subtract_conserves_length(other):
    edge = _e(0, 0, 10, 0)
    pieces = subtract_edge(edge, other)
    lo = max(0, min(other.start.x, other.end.x))
    hi = min(10, max(other.start.x, other.end.x))
    overlap = max(0, hi - lo)
    assert abs(sum(p.length for p in pieces) + overlap - edge.length) < 1e-12


# --- distributed_points ---

def test_distributed_points_include_endpoints():
    pts = distributed_points(_e(0, 0, 10, 0), 3, include_endpoints=True)
    assert pts == [Point(0, 0), Point(5, 0), Point(10, 0)]


def test_distributed_points_inside_margins():
    pts = distributed_points(_e(0, 0, 10, 0), 3, start_margin=2, end_margin=2,
                             include_endpoints=True)
    assert pts == [Point(2, 0), Point(5, 0), Point(8, 0)]


def test_distributed_points_exclude_endpoints():
    pts = distributed_points(_e(0, 0, 0, 8), 3)
    assert pts == [Point(0, 2), Point(0, 4), Point(0, 6)]


def test_distributed_points_single_point_is_midpoint():
    pts = distributed_points(_e(0, 0, 10, 0), 1, start_margin=2, end_margin=2)
    assert pts == [Point(5, 0)]


def test_distributed_points_zero_count():
    assert distributed_points(_e(0, 0, 10, 0), 0) == []


def test_distributed_points_negative_usable_length():
    pts = distributed_points(_e(0, 0, 10, 0), 3, start_margin=5, end_margin=6)
    assert len(pts) == 1
    assert pts[0].x == pytest.approx(4.5)
    assert pts[0].y == 0


def test_distributed_points_follow_edge_direction():
    pts = distributed_points(_e(10, 0, 0, 0), 2, include_endpoints=True)
    assert pts == [Point(10, 0), Point(0, 0)]


def test_distributed_points_zero_length_edge():
    assert distributed_points(_e(3, 3, 3, 3), 4) == [Point(3, 3)]


# --- combine_edges ---

def _square(x, y, s):
    return [_e(x, y, x+s, y), _e(x+s, y, x+s, y+s), _e(x+s, y+s, x, y+s), _e(x, y+s, x, y)]


def test_combine_ordered_later_list_loses_shared_edge():
    left, right = _square(0, 0, 10), _square(10, 0, 10)
    result = combine_edges([left, right], symmetrical=False)
    assert len(result) == 7
    assert result[:4] == left
    assert _e(10, 0, 10, 10) in result
    assert _e(10, 10, 10, 0) not in result


def test_combine_symmetrical_both_lose_shared_edge():
    result = combine_edges([_square(0, 0, 10), _square(10, 0, 10)], symmetrical=True)
    assert len(result) == 6
    assert all(e.start.x != 10 or e.end.x != 10 for e in result)


def test_combine_symmetrical_sequential_whittling():
    # one long edge cut by two separate short edges -> three pieces
    long = [_e(0, 0, 30, 0)]
    cuts = [[_e(5, 0, 10, 0)], [_e(20, 0, 25, 0)]]
    result = combine_edges([long] + cuts, symmetrical=True)
    assert result == [_e(0, 0, 5, 0), _e(10, 0, 20, 0), _e(25, 0, 30, 0)]


def test_combine_empty():
    assert combine_edges([], symmetrical=True) == []
    assert combine_edges([], symmetrical=False) == []


# --- closed_paths ---

def test_closed_paths_square(square_edges):
    paths = closed_paths(square_edges)
    assert paths == [[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]]


@pytest.mark.parametrize("order", list(itertools.permutations(range(4))))
def test_closed_paths_square_any_order(square_edges, order):
    paths = closed_paths([square_edges[i] for i in order])
    assert len(paths) == 1
    assert len(paths[0]) == 4
    assert set(paths[0]) == {Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)}


def test_closed_paths_reversed_edges(square_edges):
    paths = closed_paths([e.reversed() for e in square_edges])
    assert len(paths) == 1 and len(paths[0]) == 4


def test_closed_paths_two_disjoint_loops():
    paths = closed_paths(_square(0, 0, 10) + _square(20, 0, 10))
    assert len(paths) == 2
    assert paths[1][0] == Point(20, 0)


def test_closed_paths_corner_touch_in_source_order():
    # squares meeting only at (10, 10): four edges share that vertex
    paths = closed_paths(_square(0, 0, 10) + _square(10, 10, 10))
    assert paths == [
        [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
        [Point(10, 10), Point(20, 10), Point(20, 20), Point(10, 20)],
    ]


def test_closed_paths_corner_touch_depends_on_order():
    a0, a1, a2, a3 = _square(0, 0, 10)
    b0, b1, b2, b3 = _square(10, 10, 10)
    # the walk reaches (10, 10) and takes the first unused edge there, b0
    paths = closed_paths([a0, a1, b0, b1, b2, b3, a2, a3])
    assert paths == [[
        Point(0, 0), Point(10, 0), Point(10, 10), Point(20, 10),
        Point(20, 20), Point(10, 20), Point(10, 10), Point(0, 10),
    ]]


def test_closed_paths_open_chain_returned_as_is():
    paths = closed_paths([_e(0, 0, 10, 0), _e(10, 0, 10, 5)])
    assert paths == [[Point(0, 0), Point(10, 0), Point(10, 5)]]


def test_closed_paths_duplicate_edges_are_distinct():
    # both copies get walked, giving a two-point loop
    e = _e(0, 0, 10, 0)
    paths = closed_paths([e, e])
    assert paths == [[Point(0, 0), Point(10, 0)]]


def test_closed_paths_empty():
    assert closed_paths([]) == []


# --- bbox / translate ---

def test_edges_bbox():
    assert edges_bbox(_square(2, 3, 4)) == (2, 3, 6, 7)
    assert edges_bbox([]) is None


def test_translate_edges():
    assert translate_edges([_e(0, 0, 1, 0)], 2, 3) == [_e(2, 3, 3, 3)]
