"""Path-data codec: a minimal reader and writer for SVG ``d`` attributes.

Only M/L (move/line), C (cubic, end point kept) and Z (close) are understood.
Numbers are written in a fixed positional format that the reader turns back
into the same float, so export -> import -> export is byte-identical.
"""
from typing import NamedTuple

import numpy as np

from .types import Point, Loop
from .constants import (
    READ_BUFFER_LENGTH, SEPARATORS, WHITESPACE, COMMANDS, MAX_SEPARATOR_RUN,
)

# ============================================================
# Error Types
# ============================================================
class PathDataError(ValueError):
    """Raised when path data (or the document around it) cannot be read."""

class MalformedNumber(PathDataError):
    """Invalid character or overlong token while scanning a number."""

class MissingCoordinate(PathDataError):
    """An x value was read without a matching y."""

class UnexpectedToken(PathDataError):
    """Character that is neither a command, a number, nor a separator."""

# ============================================================
# Reader
# ============================================================
class PathReader:
    """Character cursor over a path string with number and point readers."""

    def __init__(self, text: str, buffer_length: int = READ_BUFFER_LENGTH):
        self.text = text
        self.pos = 0
        self.buffer_length = buffer_length

    def peek(self) -> str | None:
        return self.text[self.pos] if self.pos < len(self.text) else None

    def read(self) -> str | None:
        ch = self.peek()
        if ch is not None:
            self.pos += 1
        return ch

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def skip(self, chars: str, limit: int | None = None) -> int:
        """Advance past up to *limit* characters from *chars*; return how many."""
        n = 0
        while (limit is None or n < limit) and self.peek() is not None and self.peek() in chars:
            self.pos += 1; n += 1
        return n

    def read_float(self, max_skip: int = 0) -> float | None:
        """Read the next number, or return None if there is none here.

        Up to *max_skip* leading separators are skipped. The token ends at end
        of input, whitespace or a comma, a command letter, or a second
        decimal point.

        Only significant digits (first to last non-zero) count against
        *buffer_length*; surrounding zeros just scale the value.
        """
        self.skip(SEPARATORS, max_skip)
        mantissa = 0
        n_digits = 0
        frac_digits = 0
        significant = 0
        pending_zeros = 0
        seen_point = False
        negative = False
        while True:
            ch = self.peek()
            if ch is None:
                break
            if ch in WHITESPACE or ch in COMMANDS:
                if n_digits or seen_point or negative:
                    break
                if ch in COMMANDS:
                    return None
                raise MalformedNumber(f"Separator {ch!r} at offset {self.pos} where a number was expected")
            if ch == ".":
                if seen_point:
                    break
                seen_point = True
                self.pos += 1
                continue
            if ch == "-" and not n_digits and not seen_point and not negative:
                negative = True
                self.pos += 1
                continue
            if not "0" <= ch <= "9":
                raise MalformedNumber(
                    f"Invalid character encountered when reading number: {ch!r} at offset {self.pos}")
            d = ord(ch) - 48
            if d:
                significant += pending_zeros + 1
                pending_zeros = 0
                if significant > self.buffer_length:
                    raise MalformedNumber(
                        f"Number at offset {self.pos} exceeds {self.buffer_length} significant digits")
            elif significant:
                pending_zeros += 1
            mantissa = mantissa*10 + d
            n_digits += 1
            if seen_point:
                frac_digits += 1
            self.pos += 1

        if not n_digits:
            if seen_point or negative:
                raise MalformedNumber(f"Number without digits before offset {self.pos}")
            return None
        # sum(d * 10**-k) evaluated as one integer and a single correctly
        # rounded division
        try:
            value = mantissa / 10**frac_digits if frac_digits else float(mantissa)
        except OverflowError:
            raise MalformedNumber(f"Number before offset {self.pos} is out of range") from None
        return -value if negative else value

    def read_point(self) -> Point | None:
        """Read an "x y" / "x,y" pair. None if no x is present."""
        x = self.read_float()
        if x is None:
            return None
        if self.peek() is not None and self.peek() in SEPARATORS:
            self.pos += 1
        y = self.read_float(max_skip=MAX_SEPARATOR_RUN)
        if y is None:
            raise MissingCoordinate(f"Missing y coordinate after x={fmt_num(x)} at offset {self.pos}")
        return Point(x, y)

# ============================================================
# Command Interpreter
# ============================================================
class PathData(NamedTuple):
    """One sub-path: its points and whether it ended with Z."""
    points: list[Point]
    closed: bool


def _read_required_point(reader: PathReader, cmd: str) -> Point:
    reader.skip(WHITESPACE)
    p = reader.read_point()
    if p is None:
        raise UnexpectedToken(f"Command {cmd} at offset {reader.pos} is missing a point")
    return p


def parse_path_data(d: str) -> list[PathData]:
    """Interpret a ``d`` attribute into sub-paths.

    A bare number repeats the previous command. C keeps only its end point.
    """
    reader = PathReader(d)
    subpaths: list[PathData] = []
    points: list[Point] = []
    cmd = None
    while True:
        reader.skip(WHITESPACE)
        ch = reader.peek()
        if ch is None:
            break
        if ch in COMMANDS:
            reader.read()
            if ch == "Z":
                if points:
                    subpaths.append(PathData(points, True))
                points = []; cmd = None
                continue
            if ch == "M" and points:
                subpaths.append(PathData(points, False))
                points = []
            cmd = ch
        elif ch == "." or ch == "-" or "0" <= ch <= "9":
            if cmd is None:
                raise UnexpectedToken(f"Number at offset {reader.pos} before any command")
        else:
            raise UnexpectedToken(f"Unexpected character {ch!r} at offset {reader.pos}")

        if cmd == "C":
            _read_required_point(reader, cmd)
            _read_required_point(reader, cmd)
        points.append(_read_required_point(reader, cmd))

    if points:
        subpaths.append(PathData(points, False))
    return subpaths

# ============================================================
# Writer
# ============================================================
def fmt_num(value: float) -> str:
    """Shortest positional decimal that reads back to the same float: 5.5, 10, 0.05."""
    return np.format_float_positional(float(value) + 0.0, trim="-")

def format_loop(loop: Loop) -> str:
    """'M x0 y0 L x1 y1 ... Z' for one closed loop."""
    parts = [f"M {fmt_num(loop[0].x)} {fmt_num(loop[0].y)}"]
    parts += [f"L {fmt_num(p.x)} {fmt_num(p.y)}" for p in loop[1:]]
    parts.append("Z")
    return " ".join(parts)

def shape_path_data(shape) -> list[str]:
    """Path data for every non-empty closed loop of *shape*."""
    return [format_loop(loop) for loop in shape.closed_paths() if loop]
