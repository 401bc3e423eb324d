"""SVG documents: canvas attributes, shape ownership, export and import."""
import logging
import re
from collections.abc import Iterable
from typing import NamedTuple
from xml.etree import ElementTree as ET

from .types import EdgeSource
from .shapes import Shape
from .geometry import edges_bbox
from .pathdata import PathDataError, parse_path_data, shape_path_data, fmt_num
from .constants import (
    DEFAULT_UNIT, DEFAULT_STROKE_COLOR, DEFAULT_STROKE_WIDTH, DEFAULT_MARGIN,
    SIZE_DECIMALS, SVG_NS,
)

logger = logging.getLogger(__name__)

# ============================================================
# Attribute Types
# ============================================================
class Scalar(NamedTuple):
    """A length with a unit suffix, e.g. 123.00mm."""
    value: float
    unit: str

    @classmethod
    def from_string(cls, text: str) -> "Scalar":
        """Split '123.00mm' into (123.0, 'mm') by scanning back to the last digit."""
        text = text.strip()
        end = len(text)
        while end > 0 and not text[end-1].isdigit():
            end -= 1
        try:
            value = float(text[:end])
        except ValueError:
            raise PathDataError(f"Invalid length: {text!r}") from None
        return cls(value, text[end:])

    def __str__(self):
        return f"{self.value:.{SIZE_DECIMALS}f}{self.unit}"


class ViewBox(NamedTuple):
    """Internal coordinate system: min corner plus size."""
    min_x: float
    min_y: float
    width: float
    height: float

    @classmethod
    def from_string(cls, text: str) -> "ViewBox":
        parts = [p for p in re.split(r"[\s,]+", text.strip()) if p]
        if len(parts) != 4:
            raise PathDataError(f"viewBox needs 4 numbers, got {text!r}")
        try:
            return cls(*(float(p) for p in parts))
        except ValueError:
            raise PathDataError(f"Invalid viewBox: {text!r}") from None

    def __str__(self):
        return (f"{fmt_num(self.min_x)} {fmt_num(self.min_y)} "
                f"{self.width:.{SIZE_DECIMALS}f} {self.height:.{SIZE_DECIMALS}f}")


class DocumentAttributes:
    """Canvas size, unit, view box, and stroke style of a document."""

    def __init__(self, width: float, height: float,
                 stroke_width: float = DEFAULT_STROKE_WIDTH,
                 stroke_color: str = DEFAULT_STROKE_COLOR,
                 unit: str = DEFAULT_UNIT,
                 view_box: ViewBox | None = None):
        self.width = width
        self.height = height
        self.stroke_width = stroke_width
        self.stroke_color = stroke_color
        self.unit = unit
        self.view_box = view_box if view_box is not None else ViewBox(0.0, 0.0, width, height)

    def resize(self, width: float, height: float) -> None:
        """Set canvas size and a matching view box anchored at the origin."""
        self.width = width
        self.height = height
        self.view_box = ViewBox(0.0, 0.0, width, height)

    def svg_attributes(self) -> str:
        width = Scalar(self.width, self.unit)
        height = Scalar(self.height, self.unit)
        return f'width="{width}" height="{height}" viewBox="{self.view_box}"'

    def stroke_attributes(self) -> str:
        return f'stroke="{self.stroke_color}" stroke-width="{fmt_num(self.stroke_width)}"'

# ============================================================
# Insertion Modes
# ============================================================
class Owned(NamedTuple):
    """Document keeps its own copy; later changes to *shape* are not seen."""
    shape: Shape

class Shared(NamedTuple):
    """Document aliases *shape*; changes on either side are visible to both."""
    shape: Shape

Insertion = Owned | Shared

# ============================================================
# Document
# ============================================================
class SvgDocument:
    """A canvas of shapes exported as closed ``<path>`` elements.

    Without width/height the canvas is fitted to the content (margin
    DEFAULT_MARGIN) each time it is exported.
    """

    def __init__(self, width: float | None = None, height: float | None = None,
                 stroke_width: float = DEFAULT_STROKE_WIDTH,
                 stroke_color: str = DEFAULT_STROKE_COLOR,
                 unit: str = DEFAULT_UNIT):
        self.auto_resize = width is None or height is None
        self.attributes = DocumentAttributes(
            width or 0.0, height or 0.0, stroke_width, stroke_color, unit)
        self._entries: list[Insertion] = []

    @property
    def shapes(self) -> list[Shape]:
        return [entry.shape for entry in self._entries]

    @property
    def width(self) -> float:
        return self.attributes.width

    @property
    def height(self) -> float:
        return self.attributes.height

    def add(self, item: "Insertion | EdgeSource | Iterable[Insertion | EdgeSource]") -> None:
        """Add a shape.

        Owned(shape) and bare Shapes are copied; Shared(shape) is stored by
        reference. Other edge sources become a fresh Shape. Iterables of any
        of these are added item by item.
        """
        if isinstance(item, Shared):
            self._entries.append(item)
        elif isinstance(item, Owned):
            self._entries.append(Owned(item.shape.copy()))
        elif isinstance(item, Shape):
            self._entries.append(Owned(item.copy()))
        elif isinstance(item, EdgeSource):
            self._entries.append(Owned(Shape.from_source(item)))
        else:
            for sub in item:
                self.add(sub)

    def resize_to_fit_content(self, margin: float, offset_content: bool = False) -> None:
        """Fit the canvas to the shapes plus *margin* and half the stroke on every side.

        With offset_content, shapes are moved so the content starts at
        margin + stroke_width/2. Owned shapes are replaced by translated
        copies; Shared shapes get their edge list overwritten in place, so the
        move is visible through the caller's reference.
        """
        bbox = edges_bbox(e for entry in self._entries for e in entry.shape.edges)
        if bbox is None:
            self.attributes.resize(0.0, 0.0)
            return
        min_x, min_y, max_x, max_y = bbox
        pad = margin + self.attributes.stroke_width/2
        self.attributes.resize(max_x - min_x + 2*pad, max_y - min_y + 2*pad)
        logger.debug(f"Resized canvas to {self.attributes.width:.2f} x {self.attributes.height:.2f}")

        if not offset_content:
            return
        dx = pad - min_x; dy = pad - min_y
        moved_shared: set[int] = set()
        for i, entry in enumerate(self._entries):
            if isinstance(entry, Shared):
                # the same shape may be shared under several entries
                if id(entry.shape) in moved_shared:
                    continue
                moved_shared.add(id(entry.shape))
                entry.shape.edges = entry.shape.translated(dx, dy).edges
            else:
                self._entries[i] = Owned(entry.shape.translated(dx, dy))

    def path_data(self) -> list[str]:
        """``d`` strings for every loop of every shape, in insertion order."""
        return [d for shape in self.shapes for d in shape_path_data(shape)]

    def export(self) -> str:
        if self.auto_resize:
            self.resize_to_fit_content(DEFAULT_MARGIN)
        lines = [f'<svg xmlns="{SVG_NS}" {self.attributes.svg_attributes()}>',
                 f'<g fill="none" {self.attributes.stroke_attributes()}>']
        for d in self.path_data():
            lines.append(f'<path d="{d}" />')
        lines.append('</g>')
        lines.append('</svg>')
        return "\n".join(lines) + "\n"

    def write_svg(self, path: str) -> str:
        svg = self.export()
        with open(path, "w", encoding="utf-8") as f:
            f.write(svg)
        return svg

    # --------------------------------------------------------
    # Import
    # --------------------------------------------------------
    @classmethod
    def from_svg(cls, text: str) -> "SvgDocument":
        """Parse SVG markup. Each <path> element becomes one Shape.

        Any malformed path aborts the whole import.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise PathDataError(f"Not well-formed SVG: {e}") from e
        if _local_name(root.tag) != "svg":
            raise PathDataError(f"Root element is <{_local_name(root.tag)}>, expected <svg>")

        view_box = ViewBox.from_string(root.get("viewBox")) if root.get("viewBox") else None
        width = _length(root.get("width"), view_box.width if view_box else 0.0)
        height = _length(root.get("height"), view_box.height if view_box else 0.0)
        stroke_color, stroke_width = _stroke_style(root)

        doc = cls(width.value, height.value, stroke_width=stroke_width,
                  stroke_color=stroke_color, unit=width.unit or height.unit or DEFAULT_UNIT)
        if view_box is not None:
            doc.attributes.view_box = view_box

        for el in root.iter():
            if _local_name(el.tag) != "path":
                continue
            shape = Shape()
            for sub in parse_path_data(el.get("d", "")):
                shape.edges.extend(Shape.from_points(sub.points, closed=sub.closed).edges)
            if shape.edges:
                doc._entries.append(Owned(shape))
        logger.debug(f"Imported {len(doc._entries)} path(s), canvas {width} x {height}")
        return doc

    @classmethod
    def read_svg(cls, path: str) -> "SvgDocument":
        with open(path, encoding="utf-8") as f:
            return cls.from_svg(f.read())


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""

def _length(text: str | None, fallback: float) -> Scalar:
    """Parse a width/height attribute; missing or percentage values resolve against *fallback*."""
    if not text:
        return Scalar(fallback, "")
    length = Scalar.from_string(text)
    if length.unit == "%":
        return Scalar(fallback * length.value/100, "")
    return length

def _style_value(el: ET.Element, name: str) -> str | None:
    """Attribute *name* on *el*, falling back to its style="..." declarations."""
    value = el.get(name)
    if value:
        return value
    for decl in el.get("style", "").split(";"):
        key, _, val = decl.partition(":")
        if key.strip() == name and val.strip():
            return val.strip()
    return None

def _stroke_style(root: ET.Element) -> tuple[str, float]:
    """Stroke colour and width from the first svg/g/path element that sets them."""
    color = None; width = None
    for el in root.iter():
        if _local_name(el.tag) not in ("svg", "g", "path"):
            continue
        if color is None:
            c = _style_value(el, "stroke")
            if c and c != "none":
                color = c
        if width is None:
            w = _style_value(el, "stroke-width")
            if w:
                width = Scalar.from_string(w).value
        if color is not None and width is not None:
            break
    return (color or DEFAULT_STROKE_COLOR,
            width if width is not None else DEFAULT_STROKE_WIDTH)
