from __future__ import annotations

from .auth import ApiKeyAuthenticator, Authenticator, NoAuthenticator, TokenAuthenticator
from .builders import CsvDocumentBuilder, CsvWithGeoPointBuilder, DocumentBuilder, SimpleDocumentBuilder
from .config import Settings, settings as default_settings
from .fields import FieldNameMapper, KeyValueFieldNameMapper, LowerCaseFieldNameMapper, NoOpFieldNameMapper
from .formats import BasicFormatBuilder, CustomFormatBuilder, FormatBuilder

BUILDERS = ("csv", "csv_geo", "simple")
AUTH_TYPES = ("none", "token", "api_key")


def build_format(cfg: Settings) -> FormatBuilder:
    if cfg.csv_delimiter or cfg.csv_quote or cfg.csv_escape or cfg.csv_comment_marker:
        return CustomFormatBuilder(
            delimiter=cfg.csv_delimiter or ",",
            quote=cfg.csv_quote or '"',
            escape=cfg.csv_escape,
            comment_marker=cfg.csv_comment_marker,
        )
    return BasicFormatBuilder(style=cfg.csv_style)


def build_field_name_mapper(cfg: Settings) -> FieldNameMapper:
    if cfg.field_mappings:
        return KeyValueFieldNameMapper(mappings=dict(cfg.field_mappings))
    if cfg.lowercase_fields:
        return LowerCaseFieldNameMapper()
    return NoOpFieldNameMapper()


def build_document_builder(cfg: Settings | None = None) -> DocumentBuilder:
    cfg = cfg or default_settings
    kind = (cfg.builder or "csv").lower()
    if kind == "simple":
        return SimpleDocumentBuilder()
    common = dict(
        format_builder=build_format(cfg),
        field_name_mapper=build_field_name_mapper(cfg),
        unique_id_field=cfg.unique_id_field,
        add_timestamp_field=cfg.timestamp_field,
    )
    if kind == "csv_geo":
        return CsvWithGeoPointBuilder(
            **common,
            latitude_field=cfg.latitude_field,
            longitude_field=cfg.longitude_field,
            location_field=cfg.location_field,
        )
    if kind == "csv":
        return CsvDocumentBuilder(**common)
    raise ValueError(f"Unknown builder: {kind} (expected one of {', '.join(BUILDERS)})")


def build_authenticator(cfg: Settings | None = None) -> Authenticator:
    cfg = cfg or default_settings
    kind = (cfg.auth_type or "none").lower()
    if kind == "token":
        if not cfg.auth_token:
            raise ValueError("auth_type=token requires APP_AUTH_TOKEN")
        return TokenAuthenticator(token=cfg.auth_token)
    if kind == "api_key":
        if not (cfg.auth_key_id and cfg.auth_key_secret):
            raise ValueError("auth_type=api_key requires APP_AUTH_KEY_ID and APP_AUTH_KEY_SECRET")
        return ApiKeyAuthenticator(key_id=cfg.auth_key_id, key_secret=cfg.auth_key_secret)
    if kind == "none":
        return NoAuthenticator()
    raise ValueError(f"Unknown auth type: {kind} (expected one of {', '.join(AUTH_TYPES)})")
