"""
HTTP transport for citation sources.

Thin wrapper over requests so sources can be tested with an in-memory fake.
Timeouts are the transport's concern; there are no retries.
"""

import json
import os
from typing import Any, Optional, Protocol

import requests
from dotenv import load_dotenv

from vitae.utils.exceptions import FormatError, NetworkError

load_dotenv()
HTTP_TIMEOUT = float(os.getenv("VITAE_HTTP_TIMEOUT", "30"))
USER_AGENT = os.getenv("VITAE_USER_AGENT", "vitae/0.1")


def decode_json(text: str, url: str) -> Any:
    """
    Raises:
        FormatError: If the body is not valid JSON
    """
    try:
        return json.loads(text)
    except ValueError as e:
        raise FormatError(f"Malformed JSON from {url}: {e}") from e


class Transport(Protocol):
    def get_text(self, url: str, accept: Optional[str] = None) -> str: ...

    def get_json(self, url: str, accept: Optional[str] = None) -> Any: ...


class HttpTransport:
    """Fetches text over HTTP(S), following redirects."""

    def __init__(self, timeout: float = HTTP_TIMEOUT, user_agent: str = USER_AGENT):
        self.timeout = timeout
        self.user_agent = user_agent

    def get_text(self, url: str, accept: Optional[str] = None) -> str:
        """
        GET a URL and return the decoded body.

        Args:
            url: URL to fetch
            accept: Optional Accept header for content negotiation

        Raises:
            NetworkError: On connection failure or a non-2xx status
        """
        headers = {"User-Agent": self.user_agent}
        if accept:
            headers["Accept"] = accept
        try:
            response = requests.get(url, headers=headers, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError("Fetch failed", url=url, original_error=e) from e
        # requests assumes ISO-8859-1 for text/* without a charset
        if "charset" not in response.headers.get("Content-Type", "").lower():
            response.encoding = response.apparent_encoding
        return response.text

    def get_json(self, url: str, accept: Optional[str] = None) -> Any:
        """GET a URL and decode its body as JSON (content-negotiated via `accept`)."""
        return decode_json(self.get_text(url, accept), url)
