from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class PublicIpLookup:
    """Best-effort public IP lookup (ipify-style JSON ``{"ip": "..."}``).

    Never raises: any network or payload problem yields None.
    """

    def __init__(self, url: str, *, timeout: float = 3.0, session: Optional[requests.Session] = None):
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def fetch(self) -> Optional[str]:
        try:
            response = self._session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            ip = response.json().get("ip")
        except (requests.RequestException, ValueError, AttributeError) as e:
            logger.warning("IP lookup via %s failed: %s", self._url, e)
            return None
        return str(ip) if ip else None
