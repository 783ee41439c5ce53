from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from .errors import CredentialError
from .metrics import auth_header_failures_total
from .secrets import ExternalResolver, PasswordCodec, PasswordDecoder, SecretResolver, reveal
from .types import AuthHeader


AUTHORIZATION = "Authorization"


class Authenticator(ABC):
    name: str = "base"

    @abstractmethod
    def headers(self) -> List[AuthHeader]:
        """Headers to attach to every request. Empty means unauthenticated."""
        raise NotImplementedError


class NoAuthenticator(Authenticator):
    name = "none"

    def headers(self) -> List[AuthHeader]:
        return []


def _failed(name: str, e: CredentialError) -> List[AuthHeader]:
    logging.getLogger(__name__).error("Could not decode credentials for %s authenticator: %s", name, e)
    auth_header_failures_total.labels(authenticator=name).inc()
    return []


@dataclass
class TokenAuthenticator(Authenticator):
    token: str = field(repr=False)
    resolver: SecretResolver = field(default_factory=ExternalResolver, repr=False)
    decoder: PasswordDecoder = field(default_factory=PasswordCodec, repr=False)

    name = "token"

    def headers(self) -> List[AuthHeader]:
        try:
            plain = reveal(self.token, self.resolver, self.decoder)
        except CredentialError as e:
            return _failed(self.name, e)
        return [AuthHeader(AUTHORIZATION, f"Bearer {plain}")]


@dataclass
class ApiKeyAuthenticator(Authenticator):
    key_id: str
    key_secret: str = field(repr=False)
    resolver: SecretResolver = field(default_factory=ExternalResolver, repr=False)
    decoder: PasswordDecoder = field(default_factory=PasswordCodec, repr=False)

    name = "api_key"

    def headers(self) -> List[AuthHeader]:
        try:
            key_id = reveal(self.key_id, self.resolver, self.decoder)
            key_secret = reveal(self.key_secret, self.resolver, self.decoder)
        except CredentialError as e:
            return _failed(self.name, e)
        encoded = base64.b64encode(f"{key_id}:{key_secret}".encode("utf-8")).decode("ascii")
        return [AuthHeader(AUTHORIZATION, f"ApiKey {encoded}")]
