"""Edge sources: rectangles, free-form shapes, and compound shapes."""
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from .types import Point, Edge, EdgeSource, Loop, BBox, Side, Anchor
from .geometry import (
    InvalidSide, InvalidAnchor,
    same_edge, combine_edges, closed_paths, edges_bbox, translate_edges,
)

# Fraction of (width, height) to step back from the anchor point to reach the top-left corner
_ANCHOR_FACTORS: dict[str, tuple[float, float]] = {
    "top-left":      (0.0, 0.0), "top-center":    (0.5, 0.0), "top-right":    (1.0, 0.0),
    "center-left":   (0.0, 0.5), "center":        (0.5, 0.5), "center-right": (1.0, 0.5),
    "bottom-left":   (0.0, 1.0), "bottom-center": (0.5, 1.0), "bottom-right": (1.0, 1.0),
}

# ============================================================
# Rectangle
# ============================================================
class Rectangle(NamedTuple):
    """Axis-aligned rectangle; (x, y) is the top-left corner in SVG coordinates."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def get_edges(self) -> list[Edge]:
        """Top, right, bottom, left. Clockwise on screen."""
        return [self.edge("top"), self.edge("right"), self.edge("bottom"), self.edge("left")]

    def edge(self, side: Side) -> Edge:
        x0, y0 = self.x, self.y
        x1, y1 = self.x + self.width, self.y + self.height
        if side == "top":
            return Edge(Point(x0, y0), Point(x1, y0))
        if side == "right":
            return Edge(Point(x1, y0), Point(x1, y1))
        if side == "bottom":
            return Edge(Point(x1, y1), Point(x0, y1))
        if side == "left":
            return Edge(Point(x0, y1), Point(x0, y0))
        raise InvalidSide(f"Unknown side: {side!r}")

    def positioned(self, x: float, y: float, anchor: Anchor) -> "Rectangle":
        """Copy of this rectangle moved so its *anchor* point lands on (x, y)."""
        if anchor not in _ANCHOR_FACTORS:
            raise InvalidAnchor(f"Unknown anchor: {anchor!r}")
        fx, fy = _ANCHOR_FACTORS[anchor]
        return self._replace(x=x - self.width*fx, y=y - self.height*fy)

    @classmethod
    def from_anchor(cls, x: float, y: float, width: float, height: float,
                    anchor: Anchor) -> "Rectangle":
        return cls(0.0, 0.0, width, height).positioned(x, y, anchor)

    def translated(self, dx: float, dy: float) -> "Rectangle":
        return self._replace(x=self.x + dx, y=self.y + dy)

    def place_copies(self, points: Iterable[Point], anchor: Anchor) -> list["Rectangle"]:
        """One copy of this rectangle anchored on each point."""
        return [self.positioned(p.x, p.y, anchor) for p in points]

    def to_shape(self) -> "Shape":
        return Shape(self.get_edges())

    def __str__(self):
        return f"Rectangle: ({self.x:g}, {self.y:g}) {self.width:g}x{self.height:g}"

# ============================================================
# Shape
# ============================================================
class Shape:
    """An owned, ordered edge list.

    ``edges`` may be replaced wholesale (see SvgDocument.resize_to_fit_content
    with shared shapes); individual edges are immutable.
    """

    def __init__(self, edges: Iterable[Edge] | None = None):
        self.edges: list[Edge] = list(edges) if edges is not None else []

    @classmethod
    def from_source(cls, source: EdgeSource) -> "Shape":
        return cls(source.get_edges())

    @classmethod
    def from_points(cls, points: Sequence[Point], closed: bool = True) -> "Shape":
        """Chain consecutive points into edges.

        With closed=True an edge from the last point back to the first is
        added, unless the list already ends on its first point.
        """
        pts = [Point(*p) for p in points]
        edges = [Edge(a, b) for a, b in zip(pts, pts[1:])]
        if closed and len(pts) > 1 and pts[-1] != pts[0]:
            edges.append(Edge(pts[-1], pts[0]))
        return cls(edges)

    def get_edges(self) -> list[Edge]:
        return self.edges

    def copy(self) -> "Shape":
        return Shape(e.copy() for e in self.edges)

    def translated(self, dx: float, dy: float) -> "Shape":
        return Shape(translate_edges(self.edges, dx, dy))

    def closed_paths(self) -> list[Loop]:
        return closed_paths(self.edges)

    def bounding_box(self) -> BBox | None:
        return edges_bbox(self.edges)

    def __len__(self):
        return len(self.edges)

    def __eq__(self, other):
        """Same edges by value, each matched once, direction and order ignored."""
        if not isinstance(other, Shape):
            return NotImplemented
        if len(self.edges) != len(other.edges):
            return False
        remaining = list(other.edges)
        for edge in self.edges:
            for i, cand in enumerate(remaining):
                if same_edge(edge, cand):
                    del remaining[i]
                    break
            else:
                return False
        return True

    __hash__ = None

    def __repr__(self):
        return f"Shape({self.edges!r})"

    def __str__(self):
        return f"Shape with {len(self.edges)} edges:\n" + "\n".join(str(e) for e in self.edges)

# ============================================================
# Shape Builder
# ============================================================
def build_shape(sources: Iterable[EdgeSource], symmetrical: bool = False) -> Shape:
    """Combine edge sources into one Shape, cancelling shared boundaries.

    symmetrical=False: earlier sources take priority; a later source loses any
    boundary it shares with an earlier one.
    symmetrical=True: shared boundaries are removed from every source involved,
    and the result does not depend on source order.
    """
    return Shape(combine_edges((s.get_edges() for s in sources), symmetrical=symmetrical))


class CompoundShape:
    """Ordered group of edge sources, combined symmetrically on demand."""

    def __init__(self, *sources: EdgeSource | Iterable[EdgeSource]):
        self._sources: list[EdgeSource] = []
        self.add(*sources)

    def add(self, *sources: EdgeSource | Iterable[EdgeSource]) -> "CompoundShape":
        """Append sources; iterables of sources (e.g. from place_copies) are flattened."""
        for src in sources:
            if isinstance(src, EdgeSource):
                self._sources.append(src)
            else:
                self._sources.extend(src)
        return self

    @property
    def sources(self) -> list[EdgeSource]:
        return list(self._sources)

    def get_edges(self) -> list[Edge]:
        return build_shape(self._sources, symmetrical=True).edges

    def __len__(self):
        return len(self._sources)

    def __str__(self):
        return f"CompoundShape with {len(self._sources)} shape(s)"
