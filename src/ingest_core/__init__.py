from .types import Document, AuthHeader
from .errors import BuildError, CredentialError, FieldIndexError, IllegalReuseError, IngestError, RecordError
from .payload import Payload, StringPayload, FilePayload
from .fields import FieldNameMapper, NoOpFieldNameMapper, KeyValueFieldNameMapper, LowerCaseFieldNameMapper, safe_name
from .formats import FormatBuilder, BasicFormatBuilder, CustomFormatBuilder, CsvFormat, RecordStream
from .builders import (
    DocumentBuilder,
    DocumentStream,
    CsvDocumentBuilder,
    CsvWithGeoPointBuilder,
    SimpleDocumentBuilder,
)
from .auth import Authenticator, NoAuthenticator, TokenAuthenticator, ApiKeyAuthenticator
from .secrets import ExternalResolver, PasswordCodec, reveal

__all__ = [
    "Document",
    "AuthHeader",
    "IngestError",
    "BuildError",
    "RecordError",
    "IllegalReuseError",
    "FieldIndexError",
    "CredentialError",
    "Payload",
    "StringPayload",
    "FilePayload",
    "FieldNameMapper",
    "NoOpFieldNameMapper",
    "KeyValueFieldNameMapper",
    "LowerCaseFieldNameMapper",
    "safe_name",
    "FormatBuilder",
    "BasicFormatBuilder",
    "CustomFormatBuilder",
    "CsvFormat",
    "RecordStream",
    "DocumentBuilder",
    "DocumentStream",
    "CsvDocumentBuilder",
    "CsvWithGeoPointBuilder",
    "SimpleDocumentBuilder",
    "Authenticator",
    "NoAuthenticator",
    "TokenAuthenticator",
    "ApiKeyAuthenticator",
    "ExternalResolver",
    "PasswordCodec",
    "reveal",
]
