from __future__ import annotations

import pytest

from ingest_core.builders import CsvWithGeoPointBuilder
from ingest_core.fields import LowerCaseFieldNameMapper
from ingest_core.payload import StringPayload


def test_location_added_from_lat_lon():
    body = "id,name,latitude,longitude\nldn,London,51.5072,-0.1276\n"
    doc = next(iter(CsvWithGeoPointBuilder().build(StringPayload(body))))
    assert doc.content["location"] == {"lat": 51.5072, "lon": -0.1276}
    assert doc.content["latitude"] == "51.5072"


def test_location_skipped_when_not_numeric_or_missing():
    body = "id,latitude,longitude\na,north,1.0\nb,2.0\n"
    docs = list(CsvWithGeoPointBuilder().build(StringPayload(body)))
    assert [d.unique_id for d in docs] == ["a", "b"]
    assert all("location" not in d.content for d in docs)


def test_geo_fields_matched_after_mapping():
    body = "ID,Lat,Lon\nx,1,2\n"
    builder = CsvWithGeoPointBuilder(
        field_name_mapper=LowerCaseFieldNameMapper(),
        latitude_field="lat",
        longitude_field="lon",
        location_field="geo",
    )
    doc = next(iter(builder.build(StringPayload(body))))
    assert doc.content["geo"] == {"lat": 1.0, "lon": 2.0}


def test_to_dict_unwraps_location():
    body = "id,latitude,longitude\na,1,2\n"
    doc = next(iter(CsvWithGeoPointBuilder().build(StringPayload(body))))
    assert doc.to_dict()["content"]["location"] == {"lat": 1.0, "lon": 2.0}


def test_nested_location_is_read_only():
    body = "id,latitude,longitude\na,1,2\n"
    doc = next(iter(CsvWithGeoPointBuilder().build(StringPayload(body))))
    with pytest.raises(TypeError):
        doc.content["location"]["lat"] = 9.0  # type: ignore[index]
