# src/ingest_core/config.py
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Builder selection: csv (default) | csv_geo | simple
    builder: str = "csv"
    # CSV format: a named style, or a custom delimiter/quote (overrides the style)
    csv_style: str = "default"
    csv_delimiter: Optional[str] = None
    csv_quote: Optional[str] = None
    csv_escape: Optional[str] = None
    csv_comment_marker: Optional[str] = None
    # Column holding the document id (0 = first column)
    unique_id_field: int = 0
    # Emit current ms since epoch under this field name (disabled when unset)
    timestamp_field: Optional[str] = None
    # JSON map, e.g.: {"First_Name": "first_name", "Surname": "last_name"}
    field_mappings: dict[str, str] = {}
    lowercase_fields: bool = False
    # Geo point builder
    latitude_field: str = "latitude"
    longitude_field: str = "longitude"
    location_field: str = "location"

    # Authentication: none (default) | token | api_key
    # Secret values may be plain, PW:<base64>, %env{NAME} or %file{path}
    auth_type: str = "none"
    auth_token: Optional[str] = None
    auth_key_id: Optional[str] = None
    auth_key_secret: Optional[str] = None

    # Index store endpoint (used for connectivity checks)
    index_url: Optional[str] = None
    index_timeout_sec: float = 20.0

    # Manifest staging directory
    staging_dir: str = ".staging"

    class Config:
        env_prefix = "APP_"
        extra = "ignore"


settings = Settings()
