"""Shared test fixtures for panel outline tests."""
import pytest
from panelcut.types import Point, Edge
from panelcut.shapes import Rectangle


@pytest.fixture
def left_square():
    """10x10 square at the origin."""
    return Rectangle(0, 0, 10, 10)


@pytest.fixture
def right_square():
    """10x10 square sharing the left square's x=10 boundary."""
    return Rectangle(10, 0, 10, 10)


@pytest.fixture
def square_edges():
    """Edges of the 10x10 square in walk order."""
    return [
        Edge(Point(0, 0), Point(10, 0)),
        Edge(Point(10, 0), Point(10, 10)),
        Edge(Point(10, 10), Point(0, 10)),
        Edge(Point(0, 10), Point(0, 0)),
    ]


@pytest.fixture
def u_sources():
    """40x60 plate with a 20x30 notch cut into its top edge."""
    return [Rectangle(0, 0, 40, 60), Rectangle(10, 0, 20, 30)]
