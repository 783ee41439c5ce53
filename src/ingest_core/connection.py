from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from .auth import Authenticator, NoAuthenticator


USER_AGENT = "ingest-docs/1.0"


@dataclass
class IndexConnection:
    """Connection settings for the index store; attaches authenticator headers to requests."""

    url: str
    authenticator: Authenticator = field(default_factory=NoAuthenticator)
    timeout: float = 20.0

    def request_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        h = {"User-Agent": USER_AGENT}
        h.update(dict(self.authenticator.headers()))
        if extra:
            h.update(extra)
        return h

    def create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(self.request_headers())
        return session

    def ping(self) -> bool:
        log = logging.getLogger(__name__)
        try:
            resp = requests.get(self.url, headers=self.request_headers(), timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("Index store not reachable: url=%s error=%s", self.url, e)
            return False
        if resp.status_code >= 400:
            log.warning("Index store returned status=%d url=%s", resp.status_code, self.url)
            return False
        return True
