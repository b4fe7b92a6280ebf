"""
Legacy text representation of shapes.

Writers fall back to ``legacy_wkt()`` for shapes without a native encoding. The function
handles every kind of shape, so it can also be used on its own.
"""

from spatial_io._fmt import NumberFormat
from spatial_io.shape import Circle, GeometryShape, Point, Rectangle, Shape

import shapely


__docformat__ = "google"
__all__ = ("legacy_wkt",)


def legacy_wkt(shape: Shape, fraction_digits: int = 6) -> str:
    """
    The legacy text of a shape.

    This is the representation that writers embed for shapes they cannot encode natively.
    Numbers have at most ``fraction_digits`` digits after the decimal point, with trailing
    zeros removed:
     - ``Point`` -> ``"x y"``
     - ``Rectangle`` -> ``"minX minY maxX maxY"``
     - ``Circle`` -> ``"Circle(x y d=radius)"``, with the radius in its own unit
     - ``GeometryShape`` -> the geometry's WKT, f.e. ``"POLYGON ((0 0, 1 0, 1 1, 0 0))"``
     - anything else -> ``str(shape)``

    References:
        - https://libgeos.org/specifications/wkt/
    """
    nf = NumberFormat(fraction_digits, trim=True)

    match shape:
        case Point(x=x, y=y):
            return f"{nf.format(x)} {nf.format(y)}"
        case Rectangle():
            coords = (shape.min_x, shape.min_y, shape.max_x, shape.max_y)
            return " ".join(nf.format(c) for c in coords)
        case Circle(center=center, radius=radius):
            return f"Circle({nf.format(center.x)} {nf.format(center.y)} d={nf.format(radius)})"
        case GeometryShape(geometry=geometry):
            return shapely.to_wkt(geometry, rounding_precision=fraction_digits, trim=True)
        case _:
            return str(shape)
