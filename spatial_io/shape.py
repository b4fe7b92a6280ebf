"""
Basic definitions for (groups of) shapes.

Shapes are immutable values owned by the caller. Writers only read them through
the attributes defined here, and never keep a reference after a call returns.
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto

from shapely.geometry.base import BaseGeometry


__docformat__ = "google"
__all__ = (
    "Shape",
    "Point",
    "Rectangle",
    "BufferedLine",
    "BufferedLineString",
    "CircleKind",
    "Circle",
    "ShapeCollection",
    "GeometryShape",
)


class Shape:
    """
    Base class for shapes.

    Writers have a native encoding for each subclass in this module except
    ``GeometryShape``. Any other shape, including subclasses defined elsewhere,
    is written through a fallback that embeds its legacy text representation.
    """

    __slots__ = ()


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        msg = f"'{name}' must be finite"
        raise ValueError(msg)


def _require_buffer(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0.0:
        msg = f"'{name}' must be finite >= 0"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Point(Shape):
    """
    A point on the plane, or a (longitude, latitude) coordinate.

    Attributes:
        x: the x coordinate, or longitude
        y: the y coordinate, or latitude
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        _require_finite("x", self.x)
        _require_finite("y", self.y)


def _require_point(name: str, value: object) -> None:
    if not isinstance(value, Point):
        msg = f"'{name}' must be a Point, not {type(value).__name__}"
        raise ValueError(msg)


@dataclass(kw_only=True, frozen=True, slots=True)
class Rectangle(Shape):
    """
    An axis-aligned rectangle.

    Attributes:
        min_x: left edge
        min_y: bottom edge
        max_x: right edge
        max_y: top edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        for name in ("min_x", "min_y", "max_x", "max_y"):
            _require_finite(name, getattr(self, name))

        if self.min_x > self.max_x:
            msg = "'min_x' must be <= 'max_x'"
            raise ValueError(msg)

        if self.min_y > self.max_y:
            msg = "'min_y' must be <= 'max_y'"
            raise ValueError(msg)


@dataclass(kw_only=True, frozen=True, slots=True)
class BufferedLine(Shape):
    """
    A line segment, thickened by a buffer.

    Attributes:
        a: the start point
        b: the end point
        buf: the buffer width, in the unit of the coordinates; zero for a plain line
    """

    a: Point
    b: Point
    buf: float = 0.0

    def __post_init__(self) -> None:
        _require_point("a", self.a)
        _require_point("b", self.b)
        _require_buffer("buf", self.buf)


@dataclass(kw_only=True, frozen=True, slots=True)
class BufferedLineString(Shape):
    """
    A chain of connected line segments, thickened by a common buffer.

    Attributes:
        segments: the segments in order; each one starts where the previous one ends
    """

    segments: tuple[BufferedLine, ...]

    def __post_init__(self) -> None:
        segments = tuple(self.segments)
        object.__setattr__(self, "segments", segments)

        if not segments:
            msg = "'segments' must not be empty"
            raise ValueError(msg)

        for i, seg in enumerate(segments):
            if not isinstance(seg, BufferedLine):
                msg = f"'segments[{i}]' must be a BufferedLine, not {type(seg).__name__}"
                raise ValueError(msg)

        buf = segments[0].buf
        if any(seg.buf != buf for seg in segments):
            msg = "'segments' must share one buffer width"
            raise ValueError(msg)

        for i, (prev, seg) in enumerate(zip(segments, segments[1:]), start=1):
            if prev.b != seg.a:
                msg = f"segment {i} does not start where segment {i - 1} ends"
                raise ValueError(msg)

    @classmethod
    def from_points(cls, points: Iterable[Point], buf: float = 0.0) -> "BufferedLineString":
        """
        Build a line string through the given points.

        A single point makes up one segment of zero length.

        Raises:
            ValueError: if ``points`` is empty
        """
        pts = list(points)
        if not pts:
            msg = "'points' must not be empty"
            raise ValueError(msg)
        if len(pts) == 1:
            pts.append(pts[0])
        segments = (BufferedLine(a=a, b=b, buf=buf) for a, b in zip(pts, pts[1:]))
        return cls(segments=tuple(segments))

    @property
    def buf(self) -> float:
        """The buffer width shared by all segments."""
        return self.segments[0].buf

    @property
    def points(self) -> list[Point]:
        """The polyline: every segment's start point, followed by the last end point."""
        return [seg.a for seg in self.segments] + [self.segments[-1].b]


class CircleKind(Enum):
    """How to interpret the radius of a ``Circle``."""

    PLANAR = auto()
    """The radius is in the same unit as the coordinates."""

    GEODETIC = auto()
    """The center is a (longitude, latitude) coordinate, and the radius is in degrees of arc."""


@dataclass(kw_only=True, frozen=True, slots=True)
class Circle(Shape):
    """
    A circle around a point.

    Attributes:
        center: the center
        radius: the radius; see ``kind`` for its unit
        kind: whether this is a circle on the plane, or on the earth's surface
    """

    center: Point
    radius: float
    kind: CircleKind = CircleKind.PLANAR

    def __post_init__(self) -> None:
        _require_point("center", self.center)
        _require_buffer("radius", self.radius)

        if not isinstance(self.kind, CircleKind):
            msg = f"'kind' must be a CircleKind, not {type(self.kind).__name__}"
            raise ValueError(msg)

    @property
    def is_geodetic(self) -> bool:
        """``True`` if the radius is measured in degrees on a sphere."""
        return self.kind is CircleKind.GEODETIC


@dataclass(kw_only=True, frozen=True, slots=True)
class ShapeCollection(Shape):
    """
    An ordered group of shapes, possibly of different kinds and possibly nested.

    Attributes:
        shapes: the members of this collection
    """

    shapes: tuple[Shape, ...]

    def __post_init__(self) -> None:
        shapes = tuple(self.shapes)
        object.__setattr__(self, "shapes", shapes)

        for i, shape in enumerate(shapes):
            if not isinstance(shape, Shape):
                msg = f"'shapes[{i}]' must be a Shape, not {type(shape).__name__}"
                raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.shapes)

    def __getitem__(self, idx: int) -> Shape:
        return self.shapes[idx]

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)


@dataclass(kw_only=True, frozen=True, slots=True)
class GeometryShape(Shape):
    """
    Any Shapely geometry, f.e. a polygon with holes.

    Writers have no native encoding for these, and use the geometry's WKT instead.

    Attributes:
        geometry: the wrapped geometry
    """

    geometry: BaseGeometry

    def __post_init__(self) -> None:
        if not isinstance(self.geometry, BaseGeometry):
            msg = f"'geometry' must be a Shapely geometry, not {type(self.geometry).__name__}"
            raise ValueError(msg)
