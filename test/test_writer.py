import json
from concurrent.futures import ThreadPoolExecutor

from spatial_io import (
    BufferedLine,
    BufferedLineString,
    Circle,
    CircleKind,
    GeoJsonWriter,
    GeometryShape,
    Point,
    Rectangle,
    ShapeCollection,
    WriterConfig,
)
from spatial_io.shape import Shape

import geojson
import pytest
from shapely import MultiPoint, Polygon


@pytest.mark.xdist_group(name="fast")
def test_point(writer):
    actual = writer.to_string(Point(1, 2))
    expected = '{"type":"Point","coordinates":[1.000000,2.000000]}'
    assert actual == expected

    obj = geojson.loads(actual)
    assert isinstance(obj, geojson.Point)
    assert obj.is_valid


@pytest.mark.xdist_group(name="fast")
@pytest.mark.parametrize(
    ("x", "y", "expected"),
    [
        (0.0, 0.0, [0.0, 0.0]),
        (-122.4194, 37.7749, [-122.4194, 37.7749]),
        (1.0000004, 2.0000006, [1.0, 2.000001]),
        (180.0, -90.0, [180.0, -90.0]),
    ],
)
def test_point_coordinates_are_rounded(writer, x, y, expected):
    obj = json.loads(writer.to_string(Point(x, y)))
    assert obj["type"] == "Point"
    assert obj["coordinates"] == expected


@pytest.mark.xdist_group(name="fast")
def test_rectangle(writer):
    rect = Rectangle(min_x=0, min_y=0, max_x=10, max_y=5)
    actual = writer.to_string(rect)
    expected = (
        '{"type":"Polygon","coordinates": '
        "[[[0.000000,0.000000],[0.000000,5.000000],[10.000000,5.000000],[10.000000,0.000000]]]}"
    )
    assert actual == expected

    obj = json.loads(actual)
    (ring,) = obj["coordinates"]
    assert ring == [[0.0, 0.0], [0.0, 5.0], [10.0, 5.0], [10.0, 0.0]]


@pytest.mark.xdist_group(name="fast")
def test_rectangle_closed_ring():
    writer = GeoJsonWriter(WriterConfig(close_rings=True))
    rect = Rectangle(min_x=-1.5, min_y=-2.5, max_x=1.5, max_y=2.5)

    obj = geojson.loads(writer.to_string(rect))
    assert isinstance(obj, geojson.Polygon)
    assert obj.is_valid

    (ring,) = obj["coordinates"]
    assert len(ring) == 5
    assert ring[0] == ring[-1] == [-1.5, -2.5]


@pytest.mark.xdist_group(name="fast")
def test_buffered_line(writer):
    line = BufferedLine(a=Point(0, 0), b=Point(3, 4))
    actual = writer.to_string(line)
    expected = '{"type":"LineString","coordinates": [[0.000000,0.000000],[3.000000,4.000000]]}'
    assert actual == expected

    line = BufferedLine(a=Point(0, 0), b=Point(3, 4), buf=0.25)
    actual = writer.to_string(line)
    expected = (
        '{"type":"LineString","coordinates": [[0.000000,0.000000],[3.000000,4.000000]]'
        ',"buffer":0.250000}'
    )
    assert actual == expected

    obj = json.loads(actual)
    assert obj["buffer"] == 0.25


@pytest.mark.xdist_group(name="fast")
def test_buffered_line_string(writer):
    points = [Point(0, 0), Point(1, 1), Point(2, 0), Point(3, 1)]

    obj = json.loads(writer.to_string(BufferedLineString.from_points(points)))
    assert obj == {
        "type": "LineString",
        "coordinates": [[0.0, 0.0], [1.0, 1.0], [2.0, 0.0], [3.0, 1.0]],
    }

    actual = writer.to_string(BufferedLineString.from_points(points[:2], buf=2))
    expected = (
        '{"type":"LineString","coordinates": [[0.000000,0.000000],[1.000000,1.000000]]'
        ',"buffer":2.000000}'
    )
    assert actual == expected


@pytest.mark.xdist_group(name="fast")
def test_buffered_line_string_valid_geojson(writer):
    lines = BufferedLineString.from_points([Point(0, 0), Point(5, 5), Point(10, 0)])
    obj = geojson.loads(writer.to_string(lines))
    assert isinstance(obj, geojson.LineString)
    assert obj.is_valid


@pytest.mark.xdist_group(name="fast")
def test_planar_circle(writer):
    circle = Circle(center=Point(0, 0), radius=5)
    actual = writer.to_string(circle)
    expected = '{"type":"Circle","coordinates":[0.000000,0.000000],"radius":5.000000}'
    assert actual == expected


@pytest.mark.xdist_group(name="fast")
def test_geodetic_circle(writer):
    circle = Circle(center=Point(13.4, 52.5), radius=1, kind=CircleKind.GEODETIC)
    actual = writer.to_string(circle)
    expected = (
        '{"type":"Circle","coordinates":[13.400000,52.500000],"radius":111.195080'
        ',"properties":{"radius_units":"km"}}'
    )
    assert actual == expected

    obj = json.loads(actual)
    assert obj["properties"]["radius_units"] == "km"


@pytest.mark.xdist_group(name="fast")
def test_geometry_collection(writer):
    coll = ShapeCollection(shapes=[Point(1, 1), Point(2, 2)])
    actual = writer.to_string(coll)
    expected = (
        '{"type":"GeometryCollection","geometries": '
        '[{"type":"Point","coordinates":[1.000000,1.000000]},'
        '{"type":"Point","coordinates":[2.000000,2.000000]}]}'
    )
    assert actual == expected

    obj = geojson.loads(actual)
    assert isinstance(obj, geojson.GeometryCollection)
    assert len(obj.geometries) == 2


@pytest.mark.xdist_group(name="fast")
def test_empty_geometry_collection(writer):
    actual = writer.to_string(ShapeCollection(shapes=[]))
    assert actual == '{"type":"GeometryCollection","geometries": []}'


@pytest.mark.xdist_group(name="fast")
def test_nested_geometry_collection(writer):
    members = [
        Point(1, 2),
        Rectangle(min_x=0, min_y=0, max_x=1, max_y=1),
        BufferedLine(a=Point(0, 0), b=Point(1, 0), buf=0.5),
        Circle(center=Point(4, 4), radius=2),
        ShapeCollection(
            shapes=[
                Point(5, 5),
                ShapeCollection(shapes=[Circle(center=Point(1, 1), radius=0.5)]),
            ]
        ),
        GeometryShape(geometry=MultiPoint([(0, 0), (1, 1)])),
    ]
    coll = ShapeCollection(shapes=members)

    obj = json.loads(writer.to_string(coll))
    assert obj["type"] == "GeometryCollection"
    assert len(obj["geometries"]) == len(coll)

    for member, member_obj in zip(members, obj["geometries"]):
        assert member_obj == json.loads(writer.to_string(member))

    nested = obj["geometries"][4]
    assert nested["type"] == "GeometryCollection"
    assert nested["geometries"][1]["geometries"][0]["radius"] == 0.5


@pytest.mark.xdist_group(name="fast")
def test_unknown_geometry(writer):
    poly = Polygon(
        shell=[(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)],
        holes=[[(2, 2), (4, 2), (4, 4), (2, 2)]],
    )
    actual = writer.to_string(GeometryShape(geometry=poly))
    obj = json.loads(actual)
    assert list(obj) == ["type", "wkt"]
    assert obj["type"] == "Unknown"
    assert obj["wkt"] == "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 4 2, 4 4, 2 2))"


@pytest.mark.xdist_group(name="fast")
def test_unknown_shape_subclass(writer):
    class Label(Shape):
        __slots__ = ()

        def __str__(self) -> str:
            return 'label "A"'

    actual = writer.to_string(Label())
    assert actual == '{"type":"Unknown","wkt":"label \\"A\\""}'
    assert json.loads(actual)["wkt"] == 'label "A"'


@pytest.mark.xdist_group(name="fast")
def test_fraction_digits():
    writer = GeoJsonWriter(WriterConfig(fraction_digits=2))
    actual = writer.to_string(Circle(center=Point(1.005, -3.14159), radius=0.5))
    assert actual.startswith('{"type":"Circle","coordinates":[')
    assert actual.endswith(',"radius":0.50}')
    assert "-3.14" in actual


@pytest.mark.xdist_group(name="fast")
def test_write_streams_to_sink(writer, tmp_path):
    shape = ShapeCollection(shapes=[Point(1, 1), Rectangle(min_x=0, min_y=0, max_x=1, max_y=1)])
    path = tmp_path / "shape.json"

    with path.open("w", encoding="utf-8") as file:
        writer.write(file, shape)

    assert path.read_text(encoding="utf-8") == writer.to_string(shape)


@pytest.mark.xdist_group(name="fast")
def test_output_is_deterministic(writer):
    shape = ShapeCollection(
        shapes=[
            Point(0.1, 0.2),
            Circle(center=Point(-70.25, 43.5), radius=0.01, kind=CircleKind.GEODETIC),
            BufferedLineString.from_points([Point(0, 0), Point(1, 2), Point(3, 5)], buf=1e-3),
        ]
    )
    expected = writer.to_string(shape)

    assert writer.to_string(shape) == expected
    assert GeoJsonWriter().to_string(shape) == expected

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(writer.to_string, [shape] * 64))

    assert all(result == expected for result in results)


@pytest.mark.xdist_group(name="fast")
def test_format_name(writer):
    assert writer.format_name == "GeoJSON"
