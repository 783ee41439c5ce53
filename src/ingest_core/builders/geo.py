from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..formats import Row
from .csv import CsvDocumentBuilder


def _to_float(value: Any) -> Optional[float]:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None


@dataclass
class CsvWithGeoPointBuilder(CsvDocumentBuilder):
    """CSV builder that also emits a geo point from a latitude/longitude column pair.

    Field names are matched after mapping. Rows where either value is missing
    or not numeric are emitted without the location field.
    """

    latitude_field: str = "latitude"
    longitude_field: str = "longitude"
    location_field: str = "location"

    name = "csv_geo"

    def extend_content(self, content: Dict[str, Any], row: Row) -> None:
        lat = _to_float(content.get(self.latitude_field))
        lon = _to_float(content.get(self.longitude_field))
        if lat is None or lon is None:
            self._log.debug(
                "No geo point for row: %s=%r %s=%r",
                self.latitude_field,
                content.get(self.latitude_field),
                self.longitude_field,
                content.get(self.longitude_field),
            )
            return
        content[self.location_field] = {"lat": lat, "lon": lon}
