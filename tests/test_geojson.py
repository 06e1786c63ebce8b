"""Tests for GeoJSON parsing."""

import pytest
from geohash_cover.bbox import BoundingBox
from geohash_cover.exceptions import GeoJSONError
from geohash_cover.geojson import (
    Feature,
    FeatureCollection,
    GeometryCollection,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
    Properties,
    bounding_box,
    iter_coordinates,
    parse_geojson,
)


POLYGON_WITH_HOLE = """{
    "type": "Polygon",
    "coordinates": [
        [[100.0, 0.0], [101.0, 0.0], [101.0, 1.0], [100.0, 1.0], [100.0, 0.0]],
        [[100.8, 0.8], [100.8, 0.2], [100.2, 0.2], [100.2, 0.8], [100.8, 0.8]]
    ]
}"""

FEATURE_POLYGON = """{
    "id": 588419,
    "geometry": {
        "coordinates": [
            [[77.35, 12.75], [77.35, 13.23], [77.85, 13.23], [77.85, 12.75], [77.35, 12.75]]
        ],
        "type": "Polygon"
    },
    "properties": {"FID": 588419},
    "type": "Feature"
}"""

FEATURE_LINESTRING = """{
    "id": 100001035,
    "geometry": {
        "coordinates": [
            [77.52420806884766, 12.987045288085938],
            [77.5242919921875, 12.98731803894043],
            [77.52436065673828, 12.987621307373049],
            [77.52440643310547, 12.987802505493164],
            [77.52530670166016, 12.988258361816406]
        ],
        "type": "LineString"
    },
    "properties": {
        "startNodeId": 1548580548,
        "endNodeId": 1548580888,
        "highway": "residential"
    },
    "type": "Feature"
}"""


class TestParseGeometry:
    """Tests for parsing bare geometries."""

    def test_polygon(self):
        """Test a polygon with a hole."""
        actual = parse_geojson(POLYGON_WITH_HOLE)
        assert actual == Polygon([
            [(100.0, 0.0), (101.0, 0.0), (101.0, 1.0), (100.0, 1.0), (100.0, 0.0)],
            [(100.8, 0.8), (100.8, 0.2), (100.2, 0.2), (100.2, 0.8), (100.8, 0.8)],
        ])

    def test_point_from_mapping(self):
        """Test parsing an already-decoded object."""
        actual = parse_geojson({"type": "Point", "coordinates": [102, 0.5]})
        assert actual == Point((102.0, 0.5))

    def test_multipolygon(self):
        """Test a three-level nested geometry."""
        actual = parse_geojson({
            "type": "MultiPolygon",
            "coordinates": [[[[0, 0], [1, 0], [1, 1], [0, 0]]]],
        })
        assert isinstance(actual, MultiPolygon)
        assert actual.coordinates[0][0][2] == (1.0, 1.0)

    def test_geometry_collection(self):
        """Test a collection of mixed geometries."""
        actual = parse_geojson({
            "type": "GeometryCollection",
            "geometries": [
                {"type": "Point", "coordinates": [1, 2]},
                {"type": "LineString", "coordinates": [[3, 4], [5, 6]]},
            ],
        })
        assert actual == GeometryCollection([
            Point((1.0, 2.0)),
            LineString([(3.0, 4.0), (5.0, 6.0)]),
        ])


class TestParseFeature:
    """Tests for features and feature collections."""

    def test_feature_polygon(self):
        """Test a feature with an integer property."""
        actual = parse_geojson(FEATURE_POLYGON)
        assert isinstance(actual, Feature)
        assert actual.id == 588419
        assert actual.properties.value("FID", int) == 588419
        assert isinstance(actual.geometry, Polygon)

    def test_feature_linestring(self):
        """Test a feature with several properties."""
        actual = parse_geojson(FEATURE_LINESTRING)
        assert actual == Feature(
            id=100001035,
            geometry=LineString([
                (77.52420806884766, 12.987045288085938),
                (77.5242919921875, 12.98731803894043),
                (77.52436065673828, 12.987621307373049),
                (77.52440643310547, 12.987802505493164),
                (77.52530670166016, 12.988258361816406),
            ]),
            properties=Properties({
                "startNodeId": 1548580548,
                "endNodeId": 1548580888,
                "highway": "residential",
            }),
        )

    def test_feature_without_id(self):
        """Test that id and properties are optional."""
        actual = parse_geojson({
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [102.0, 0.5]},
            "properties": None,
        })
        assert actual.id is None
        assert actual.properties == {}

    def test_feature_collection(self):
        """Test a collection of features."""
        actual = parse_geojson({
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}},
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [3, 4]}},
            ],
        })
        assert isinstance(actual, FeatureCollection)
        assert len(actual.features) == 2


class TestInvalidGeoJSON:
    """Tests for rejected documents."""

    def test_unknown_type(self):
        """Test that an unknown type is rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson('{"type": "jadlf"}')

    def test_invalid_json(self):
        """Test that non-JSON text is rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson("{not json")

    def test_missing_coordinates(self):
        """Test that a geometry without coordinates is rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson({"type": "Point"})

    def test_bad_position(self):
        """Test that malformed positions are rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson({"type": "Point", "coordinates": ["a", "b"]})
        with pytest.raises(GeoJSONError):
            parse_geojson({"type": "LineString", "coordinates": [[1.0]]})

    def test_bad_feature_id(self):
        """Test that a non-integer feature id is rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson({
                "type": "Feature",
                "id": "abc",
                "geometry": {"type": "Point", "coordinates": [0, 0]},
            })

    def test_invalid_utf8(self):
        """Test that undecodable bytes are rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson(b'{"type": "Point", "coordinates": [1, \xff]}')

    def test_bytes(self):
        """Test parsing UTF-8 encoded bytes."""
        actual = parse_geojson(b'{"type": "Point", "coordinates": [1, 2]}')
        assert actual == Point((1.0, 2.0))

    def test_not_an_object(self):
        """Test that a JSON array is rejected."""
        with pytest.raises(GeoJSONError):
            parse_geojson("[1, 2]")


class TestProperties:
    """Tests for typed property access."""

    def setup_method(self):
        self.props = Properties({
            "count": 3,
            "ratio": 0.5,
            "name": "residential",
            "flag": True,
            "nested": {"name": "John", "surname": "Doe"},
        })

    def test_untyped(self):
        """Test raw value access."""
        assert self.props.value("nested") == {"name": "John", "surname": "Doe"}

    def test_missing(self):
        """Test that a missing property gives None."""
        assert self.props.value("absent") is None
        assert self.props.value("absent", int) is None

    def test_matching_type(self):
        """Test typed access with the stored type."""
        assert self.props.value("name", str) == "residential"
        assert self.props.value("nested", dict) == {"name": "John", "surname": "Doe"}

    def test_numeric_conversion(self):
        """Test lossless numeric conversions."""
        assert self.props.value("count", float) == 3.0

    def test_float_is_not_int(self):
        """Test that a whole-number float is not returned as an int."""
        assert Properties({"FID": 3.0}).value("FID", int) is None
        assert Properties({"FID": 3.0}).value("FID", float) == 3.0

    def test_mismatch(self):
        """Test that incompatible values give None."""
        assert self.props.value("name", int) is None
        assert self.props.value("ratio", int) is None
        assert self.props.value("flag", int) is None


class TestBoundingBox:
    """Tests for deriving query boxes."""

    def test_polygon_extent(self):
        """Test the extent of a feature polygon."""
        box = bounding_box(parse_geojson(FEATURE_POLYGON))
        assert box == BoundingBox(12.75, 77.35, 13.23, 77.85)

    def test_point_extent(self):
        """Test that a point gives a zero-area box."""
        box = bounding_box(Point((102.0, 0.5)))
        assert box == BoundingBox(0.5, 102.0, 0.5, 102.0)

    def test_collection_extent(self):
        """Test the extent across several features."""
        collection = parse_geojson({
            "type": "FeatureCollection",
            "features": [
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}},
                {"type": "Feature", "geometry": {"type": "Point", "coordinates": [-3, 4]}},
            ],
        })
        assert bounding_box(collection) == BoundingBox(2.0, -3.0, 4.0, 1.0)

    def test_iter_coordinates(self):
        """Test that every ring position is visited."""
        coords = list(iter_coordinates(parse_geojson(POLYGON_WITH_HOLE)))
        assert len(coords) == 10

    def test_empty(self):
        """Test that an object without positions is rejected."""
        with pytest.raises(GeoJSONError):
            bounding_box(LineString([]))
