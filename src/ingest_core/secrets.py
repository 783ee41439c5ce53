from __future__ import annotations

import base64
import binascii
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import CredentialError


_ENV_REF = re.compile(r"^%env\{([^}]+)\}$")
_FILE_REF = re.compile(r"^%file\{([^}]+)\}$")

OBFUSCATED_PREFIX = "PW:"


class SecretResolver(ABC):
    @abstractmethod
    def resolve(self, value: str) -> str:
        """Turn an external reference into the stored (possibly encoded) secret."""
        raise NotImplementedError


@dataclass
class ExternalResolver(SecretResolver):
    """Resolve ``%env{NAME}`` and ``%file{path}`` references; other values pass through."""

    environ: Optional[Mapping[str, str]] = None

    def resolve(self, value: str) -> str:
        if value is None:
            raise CredentialError("secret reference is not set")
        if not isinstance(value, str):
            raise CredentialError(f"secret reference must be a string, got {type(value).__name__}")
        m = _ENV_REF.match(value)
        if m:
            env = self.environ if self.environ is not None else os.environ
            name = m.group(1)
            if name not in env:
                raise CredentialError(f"environment variable {name} is not set")
            return env[name]
        m = _FILE_REF.match(value)
        if m:
            try:
                return Path(m.group(1)).expanduser().read_text(encoding="utf-8").strip()
            except (OSError, UnicodeDecodeError) as e:
                raise CredentialError(f"could not read secret file {m.group(1)}: {e}") from e
        return value


class PasswordDecoder(ABC):
    @abstractmethod
    def decode(self, value: str) -> str:
        raise NotImplementedError


class PasswordCodec(PasswordDecoder):
    """``PW:<base64>`` values are obfuscated passwords; anything else is plain text."""

    def decode(self, value: str) -> str:
        if not isinstance(value, str):
            raise CredentialError(f"password must be a string, got {type(value).__name__}")
        if not value.startswith(OBFUSCATED_PREFIX):
            return value
        encoded = value[len(OBFUSCATED_PREFIX):]
        try:
            return base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise CredentialError(f"could not decode password: {e}") from e

    @staticmethod
    def encode(plain: str) -> str:
        return OBFUSCATED_PREFIX + base64.b64encode(plain.encode("utf-8")).decode("ascii")


def reveal(value: str, resolver: SecretResolver, decoder: PasswordDecoder) -> str:
    """Resolve an external reference, then decode it. The result is never stored."""
    return decoder.decode(resolver.resolve(value))
