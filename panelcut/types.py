"""Shared type definitions for panel outlines."""
import math
from typing import Literal, NamedTuple, Protocol, runtime_checkable


class Point(NamedTuple):
    """2D coordinate. Equality and hashing are exact on both fields."""
    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def __str__(self):
        return f"({self.x}, {self.y})"


class Edge(NamedTuple):
    """Directed line segment. Edge(a, b) != Edge(b, a)."""
    start: Point
    end: Point

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y

    @property
    def is_vertical(self) -> bool:
        return self.start.x == self.end.x

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    def copy(self) -> "Edge":
        return Edge(Point(self.start.x, self.start.y), Point(self.end.x, self.end.y))

    def reversed(self) -> "Edge":
        return Edge(self.end, self.start)

    def offset(self, dx: float, dy: float) -> "Edge":
        return Edge(self.start.offset(dx, dy), self.end.offset(dx, dy))

    def __str__(self):
        return f"Edge: {self.start} -> {self.end}"


@runtime_checkable
class EdgeSource(Protocol):
    """Anything that can produce an edge sequence (Rectangle, Shape, CompoundShape, ...)."""

    def get_edges(self) -> list[Edge]: ...


Loop = list[Point]

BBox = tuple[float, float, float, float]   # min_x, min_y, max_x, max_y

Side = Literal["top", "right", "bottom", "left"]

Anchor = Literal[
    "top-left", "top-center", "top-right",
    "center-left", "center", "center-right",
    "bottom-left", "bottom-center", "bottom-right",
]
