"""Panel outlines: edge cancellation, loop reconstruction, and SVG path I/O."""

from .types import Point, Edge, EdgeSource, Loop, BBox, Side, Anchor
from .geometry import (
    GeometryError, InvalidSide, InvalidAnchor,
    same_edge, subtract_edge, distributed_points,
    combine_edges, closed_paths, edges_bbox, translate_edges,
)
from .shapes import Rectangle, Shape, CompoundShape, build_shape
from .pathdata import (
    PathDataError, MalformedNumber, MissingCoordinate, UnexpectedToken,
    PathReader, PathData, parse_path_data,
    fmt_num, format_loop, shape_path_data,
)
from .svg import Scalar, ViewBox, DocumentAttributes, Owned, Shared, SvgDocument
from .logging_config import setup_logging
