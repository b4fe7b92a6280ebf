"""
Writes shapes as GeoJSON-like text.

Points, rectangles, buffered lines, circles, and (nested) collections of them have a
native encoding. Any other shape is written with its legacy text representation.

```python
from spatial_io import GeoJsonWriter, Point

GeoJsonWriter().to_string(Point(1, 2))
# '{"type":"Point","coordinates":[1.000000,2.000000]}'
```
"""

import importlib.metadata


__version__: str = importlib.metadata.version("spatial-io")

# we add this to all modules for pdoc;
# see https://pdoc.dev/docs/pdoc.html#use-numpydoc-or-google-docstrings
__docformat__ = "google"

# we also use __all__ in all modules for pdoc; this lets us control the order
__all__ = (
    "__version__",
    "GeoJsonWriter",
    "ShapeWriter",
    "WriterConfig",
    "writer_for",
    "ShapeIOError",
    "Point",
    "Rectangle",
    "BufferedLine",
    "BufferedLineString",
    "Circle",
    "CircleKind",
    "ShapeCollection",
    "GeometryShape",
    "error",
    "legacy",
    "shape",
    "writer",
)

from .error import ShapeIOError
from .shape import (
    BufferedLine,
    BufferedLineString,
    Circle,
    CircleKind,
    GeometryShape,
    Point,
    Rectangle,
    ShapeCollection,
)
from .writer import GeoJsonWriter, ShapeWriter, WriterConfig, writer_for
