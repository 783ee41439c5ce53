from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ingest_core.auth import ApiKeyAuthenticator, Authenticator, NoAuthenticator, TokenAuthenticator
from ingest_core.builders import CsvDocumentBuilder, CsvWithGeoPointBuilder, DocumentBuilder, SimpleDocumentBuilder
from ingest_core.fields import FieldNameMapper, KeyValueFieldNameMapper, LowerCaseFieldNameMapper, NoOpFieldNameMapper
from ingest_core.formats import BasicFormatBuilder, CustomFormatBuilder, FormatBuilder


@dataclass
class IngestConfig:
    builder: DocumentBuilder
    authenticator: Authenticator = field(default_factory=NoAuthenticator)
    index_url: Optional[str] = None


def load_config(path: Path) -> IngestConfig:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return config_from_dict(data)


_CUSTOM_FORMAT_KEYS = (
    "delimiter",
    "quote",
    "escape",
    "comment_marker",
    "ignore_empty_lines",
    "ignore_surrounding_spaces",
    "strict",
)


def _format_from(item: Dict[str, Any]) -> FormatBuilder:
    fmt = item.get("format") or {}
    if isinstance(fmt, str):
        return BasicFormatBuilder(style=fmt)
    unknown = set(fmt) - set(_CUSTOM_FORMAT_KEYS) - {"style"}
    if unknown:
        raise ValueError(f"Unknown format options: {', '.join(sorted(unknown))}")
    if any(k in fmt for k in _CUSTOM_FORMAT_KEYS):
        if "style" in fmt:
            raise ValueError("format: use either style or custom options, not both")
        return CustomFormatBuilder(
            delimiter=fmt.get("delimiter", ","),
            quote=fmt.get("quote", '"'),
            escape=fmt.get("escape"),
            comment_marker=fmt.get("comment_marker"),
            ignore_empty_lines=bool(fmt.get("ignore_empty_lines", True)),
            ignore_surrounding_spaces=bool(fmt.get("ignore_surrounding_spaces", False)),
            strict=bool(fmt.get("strict", False)),
        )
    return BasicFormatBuilder(style=fmt.get("style", "default"))


def _mapper_from(item: Dict[str, Any]) -> FieldNameMapper:
    mapper = item.get("field_names")
    if not mapper:
        return NoOpFieldNameMapper()
    if mapper == "lowercase":
        return LowerCaseFieldNameMapper()
    if isinstance(mapper, dict):
        return KeyValueFieldNameMapper(mappings={str(k): str(v) for k, v in mapper.items()})
    raise ValueError(f"Unsupported field_names: {mapper!r}")


def builder_from_dict(item: Dict[str, Any]) -> DocumentBuilder:
    t = (item.get("type") or "csv").lower()
    if t == "simple":
        return SimpleDocumentBuilder()
    common = dict(
        format_builder=_format_from(item),
        field_name_mapper=_mapper_from(item),
        unique_id_field=item.get("unique_id_field"),
        add_timestamp_field=item.get("timestamp_field"),
    )
    if t == "csv":
        return CsvDocumentBuilder(**common)
    if t == "csv_geo":
        return CsvWithGeoPointBuilder(
            **common,
            latitude_field=item.get("latitude_field", "latitude"),
            longitude_field=item.get("longitude_field", "longitude"),
            location_field=item.get("location_field", "location"),
        )
    raise ValueError(f"Unknown builder type: {t}")


def _secret(item: Dict[str, Any], key: str) -> str:
    # YAML turns bare numbers into ints
    value = item.get(key)
    if value is None:
        raise ValueError(f"auth.{key} is required")
    return str(value)


def authenticator_from_dict(item: Dict[str, Any]) -> Authenticator:
    t = (item.get("type") or "none").lower()
    if t == "none":
        return NoAuthenticator()
    if t == "token":
        return TokenAuthenticator(token=_secret(item, "token"))
    if t == "api_key":
        return ApiKeyAuthenticator(key_id=_secret(item, "key_id"), key_secret=_secret(item, "key_secret"))
    raise ValueError(f"Unknown auth type: {t}")


def config_from_dict(data: Dict[str, Any]) -> IngestConfig:
    return IngestConfig(
        builder=builder_from_dict(data.get("builder") or {}),
        authenticator=authenticator_from_dict(data.get("auth") or {}),
        index_url=data.get("index_url"),
    )
