"""Shape writers and the format registry."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from io import StringIO
from typing import Any, TextIO

from spatial_io._dist import EARTH_MEAN_RADIUS_KM, degrees_to_dist
from spatial_io._fmt import NumberFormat, write_coords
from spatial_io.error import InternalWriterError, InvalidShapeError
from spatial_io.legacy import legacy_wkt
from spatial_io.shape import (
    BufferedLine,
    BufferedLineString,
    Circle,
    CircleKind,
    Point,
    Rectangle,
    Shape,
    ShapeCollection,
)


__docformat__ = "google"
__all__ = (
    "ShapeWriter",
    "GeoJsonWriter",
    "WriterConfig",
    "register_writer",
    "writer_for",
    "FORMAT_GEOJSON",
)


FORMAT_GEOJSON = "GeoJSON"
"""Format name of the ``GeoJsonWriter``."""

_MAX_FRACTION_DIGITS = 17
"""More digits than this cannot tell two doubles apart."""

_DEFAULT_LOGGER = logging.getLogger("spatial_io")
_DEFAULT_LOGGER.addHandler(logging.NullHandler())


@dataclass(kw_only=True, slots=True, frozen=True)
class WriterConfig:
    """
    Writer settings.

    Attributes:
        fraction_digits: The number of digits written after the decimal point of every number.
                         Defaults to 6.
        close_rings: If set, a rectangle's ring repeats its first corner at the end, as required
                     by RFC 7946. Defaults to ``False``, which writes just the four corners.
    """

    fraction_digits: int = 6
    close_rings: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.fraction_digits <= _MAX_FRACTION_DIGITS:
            msg = f"'fraction_digits' must be >= 0 and <= {_MAX_FRACTION_DIGITS}"
            raise ValueError(msg)


class ShapeWriter(ABC):
    """
    Encodes shapes in a text format.

    Implementations are expected to be thread-safe.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def format_name(self) -> str:
        """The name this writer is registered with."""
        raise NotImplementedError

    @abstractmethod
    def write(self, output: TextIO, shape: Shape) -> None:
        """
        Write a shape to ``output``.

        Raises:
            InvalidShapeError: if ``shape`` is ``None`` or no ``Shape``; nothing is written then
            OSError: if ``output`` fails; some text may have been written at that point
        """
        raise NotImplementedError

    def to_string(self, shape: Shape) -> str:
        """
        Write a shape to a string.

        Raises:
            InvalidShapeError: if ``shape`` is ``None`` or no ``Shape``
            InternalWriterError: if writing to the in-memory buffer failed
        """
        buffer = StringIO()
        try:
            self.write(buffer, shape)
        except OSError as err:
            self._logger.error(f"failed to write {shape!r} in memory", exc_info=err)
            raise InternalWriterError(cause=err) from err
        return buffer.getvalue()

    @property
    def _logger(self) -> logging.Logger:
        return _DEFAULT_LOGGER


class GeoJsonWriter(ShapeWriter):
    """
    Writes shapes as GeoJSON-like text.

    Each shape is written as one JSON object:
     - ``Point`` -> ``Point``
     - ``Rectangle`` -> ``Polygon`` with a single ring of its corners, starting at the
       lower left corner and going clockwise
     - ``BufferedLine`` and ``BufferedLineString`` -> ``LineString``, with an additional
       ``buffer`` member if the buffer width is not zero
     - ``Circle`` -> ``Circle`` with a ``radius`` member; circles on the earth's surface
       have their radius converted to kilometers, which is stated in
       ``properties.radius_units``
     - ``ShapeCollection`` -> ``GeometryCollection``
     - anything else -> ``Unknown`` with the legacy text of the shape as ``wkt`` member

    The output for equal shapes is always byte-identical. Members are written in a fixed
    order, starting with ``type``.

    Args:
        config: Output settings.
        logger: The logger to use for all logging output of this writer.

    References:
        - https://tools.ietf.org/html/rfc7946
        - https://github.com/geojson/geojson-spec/wiki/Proposal---Circles-and-Ellipses-Geoms
    """

    __slots__ = (
        "_config",
        "_log",
    )

    def __init__(
        self,
        config: WriterConfig | None = None,
        logger: logging.Logger = _DEFAULT_LOGGER,
    ) -> None:
        self._config = config or WriterConfig()
        self._log = logger

    @property
    def format_name(self) -> str:
        """Always ``"GeoJSON"``."""
        return FORMAT_GEOJSON

    @property
    def config(self) -> WriterConfig:
        """The settings of this writer."""
        return self._config

    @property
    def _logger(self) -> logging.Logger:
        return self._log

    def write(self, output: TextIO, shape: Shape) -> None:
        """
        Write a shape to ``output``.

        Raises:
            InvalidShapeError: if ``shape`` is ``None`` or no ``Shape``; nothing is written then
            OSError: if ``output`` fails; some text may have been written at that point
        """
        if shape is None:
            raise InvalidShapeError(shape=shape, reason="shape can not be None")

        if not isinstance(shape, Shape):
            raise InvalidShapeError(shape=shape, reason=f"{type(shape).__name__} is no Shape")

        self._log.debug(f"write {type(shape).__name__} as {self.format_name}")

        nf = NumberFormat(self._config.fraction_digits)
        self._write(output, nf, shape)

    def _write(self, output: TextIO, nf: NumberFormat, shape: Shape) -> None:
        match shape:
            case Point(x=x, y=y):
                output.write('{"type":"Point","coordinates":')
                write_coords(output, nf, x, y)
                output.write("}")

            case Rectangle():
                corners = [
                    (shape.min_x, shape.min_y),
                    (shape.min_x, shape.max_y),
                    (shape.max_x, shape.max_y),
                    (shape.max_x, shape.min_y),
                ]
                if self._config.close_rings:
                    corners.append(corners[0])

                output.write('{"type":"Polygon","coordinates": [[')
                self._write_points(output, nf, corners)
                output.write("]]}")

            case BufferedLine(a=a, b=b, buf=buf):
                output.write('{"type":"LineString","coordinates": [')
                self._write_points(output, nf, [(a.x, a.y), (b.x, b.y)])
                output.write("]")
                self._write_buffer(output, nf, buf)
                output.write("}")

            case BufferedLineString():
                output.write('{"type":"LineString","coordinates": [')
                self._write_points(output, nf, [(p.x, p.y) for p in shape.points])
                output.write("]")
                self._write_buffer(output, nf, shape.buf)
                output.write("}")

            case Circle(center=center, radius=radius, kind=CircleKind.GEODETIC):
                dist_km = degrees_to_dist(radius, EARTH_MEAN_RADIUS_KM)
                output.write('{"type":"Circle","coordinates":')
                write_coords(output, nf, center.x, center.y)
                output.write(',"radius":')
                output.write(nf.format(dist_km))
                output.write(',"properties":{"radius_units":"km"}}')

            case Circle(center=center, radius=radius):
                output.write('{"type":"Circle","coordinates":')
                write_coords(output, nf, center.x, center.y)
                output.write(',"radius":')
                output.write(nf.format(radius))
                output.write("}")

            case ShapeCollection():
                output.write('{"type":"GeometryCollection","geometries": [')
                for i, member in enumerate(shape):
                    if i > 0:
                        output.write(",")
                    self._write(output, nf, member)
                output.write("]}")

            case _:
                self._log.debug(f"no native encoding for {type(shape).__name__}, write as WKT")
                wkt = legacy_wkt(shape, self._config.fraction_digits)
                output.write('{"type":"Unknown","wkt":')
                output.write(json.dumps(wkt))
                output.write("}")

    @staticmethod
    def _write_points(
        output: TextIO,
        nf: NumberFormat,
        points: list[tuple[float, float]],
    ) -> None:
        for i, (x, y) in enumerate(points):
            if i > 0:
                output.write(",")
            write_coords(output, nf, x, y)

    @staticmethod
    def _write_buffer(output: TextIO, nf: NumberFormat, buf: float) -> None:
        if buf > 0.0:
            output.write(',"buffer":')
            output.write(nf.format(buf))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config!r})"


WriterFactory = Callable[..., ShapeWriter]
"""Anything that returns a writer, f.e. a ``ShapeWriter`` subclass."""

_REGISTRY: dict[str, WriterFactory] = {}


def register_writer(name: str, factory: WriterFactory) -> None:
    """
    Make a writer available by name.

    Names are case-insensitive. Registering a name again replaces the previous factory.
    """
    if not name:
        msg = "'name' must not be empty"
        raise ValueError(msg)
    _REGISTRY[name.lower()] = factory


def writer_for(name: str, **kwargs: Any) -> ShapeWriter:
    """
    Create the writer registered for a format name.

    Args:
        name: the case-insensitive format name, f.e. ``"GeoJSON"``
        **kwargs: passed to the writer's factory

    Raises:
        ValueError: if there is no writer for ``name``
    """
    try:
        factory = _REGISTRY[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        msg = f"no writer for format '{name}' (known: {known})"
        raise ValueError(msg) from None
    return factory(**kwargs)


register_writer(FORMAT_GEOJSON, GeoJsonWriter)
