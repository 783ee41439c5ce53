from __future__ import annotations

import base64
import logging

from ingest_core.auth import ApiKeyAuthenticator, NoAuthenticator, TokenAuthenticator
from ingest_core.errors import CredentialError
from ingest_core.secrets import ExternalResolver, PasswordCodec, PasswordDecoder
from ingest_core.types import AuthHeader


class _FailingDecoder(PasswordDecoder):
    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls: list[str] = []

    def decode(self, value: str) -> str:
        self.calls.append(value)
        if self.fail_on is None or value == self.fail_on:
            raise CredentialError("bad password")
        return value


def test_token_header():
    assert TokenAuthenticator(token="s3cr3t").headers() == [AuthHeader("Authorization", "Bearer s3cr3t")]


def test_token_header_from_obfuscated_env_reference():
    resolver = ExternalResolver(environ={"ES_TOKEN": PasswordCodec.encode("s3cr3t")})
    auth = TokenAuthenticator(token="%env{ES_TOKEN}", resolver=resolver)
    assert dict(auth.headers()) == {"Authorization": "Bearer s3cr3t"}


def test_token_decode_failure_yields_no_headers(caplog):
    auth = TokenAuthenticator(token="s3cr3t", decoder=_FailingDecoder())
    with caplog.at_level(logging.ERROR):
        assert auth.headers() == []
    assert "Could not decode credentials" in caplog.text


def test_token_resolution_failure_yields_no_headers():
    auth = TokenAuthenticator(token="%env{MISSING}", resolver=ExternalResolver(environ={}))
    assert auth.headers() == []


def test_api_key_header():
    headers = ApiKeyAuthenticator(key_id="k", key_secret="v").headers()
    expected = base64.b64encode(b"k:v").decode("ascii")
    assert headers == [AuthHeader("Authorization", f"ApiKey {expected}")]
    assert expected == "azp2"


def test_api_key_partial_failure_yields_nothing():
    decoder = _FailingDecoder(fail_on="v")
    auth = ApiKeyAuthenticator(key_id="k", key_secret="v", decoder=decoder)
    assert auth.headers() == []
    assert decoder.calls == ["k", "v"]


def test_api_key_resolution_happens_before_decode():
    resolver = ExternalResolver(environ={"KID": "PW:aWQ=", "KSEC": "PW:c2VjcmV0"})
    auth = ApiKeyAuthenticator(key_id="%env{KID}", key_secret="%env{KSEC}", resolver=resolver)
    expected = base64.b64encode(b"id:secret").decode("ascii")
    assert auth.headers() == [AuthHeader("Authorization", f"ApiKey {expected}")]


def test_no_authenticator():
    assert NoAuthenticator().headers() == []


def test_secrets_not_in_repr():
    assert "s3cr3t" not in repr(TokenAuthenticator(token="s3cr3t"))
    assert "hush" not in repr(ApiKeyAuthenticator(key_id="k", key_secret="hush"))


def test_undecodable_secret_file_yields_no_headers(tmp_path):
    p = tmp_path / "token.bin"
    p.write_bytes(b"\xff\xfe\xfa")
    assert TokenAuthenticator(token=f"%file{{{p}}}").headers() == []


def test_non_string_key_id_yields_no_headers():
    assert ApiKeyAuthenticator(key_id=123, key_secret="v").headers() == []  # type: ignore[arg-type]
