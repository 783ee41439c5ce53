from .base import DocumentBuilder, DocumentStream
from .csv import CsvDocumentBuilder
from .geo import CsvWithGeoPointBuilder
from .simple import SimpleDocumentBuilder

__all__ = [
    "DocumentBuilder",
    "DocumentStream",
    "CsvDocumentBuilder",
    "CsvWithGeoPointBuilder",
    "SimpleDocumentBuilder",
]
