"""HTTP GET transport for CDN assets and the Super API (single attempt)."""

from __future__ import annotations

import urllib.error
import urllib.request
from socket import timeout as SocketTimeout
from typing import Callable

DEFAULT_TIMEOUT_SECONDS = 30.0
USER_AGENT = "superfluid-skill-resolver/1.0"
BODY_EXCERPT_CHARS = 500

Fetcher = Callable[[str], bytes]


class FetchError(Exception):
    """A GET request did not produce a successful response body."""


class HttpStatusError(FetchError):
    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body


class TransportError(FetchError):
    pass


def http_get(url: str, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> bytes:
    req = urllib.request.Request(url, method="GET", headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout_seconds) as resp:
            status = getattr(resp, "status", 200)
            payload = resp.read()
    except urllib.error.HTTPError as err:
        body = err.read().decode("utf-8", errors="replace")
        raise HttpStatusError(err.code, body[:BODY_EXCERPT_CHARS]) from err
    except SocketTimeout as err:
        raise TransportError(f"timed out after {timeout_seconds:g}s") from err
    except urllib.error.URLError as err:
        raise TransportError(str(err.reason)) from err
    except OSError as err:
        raise TransportError(str(err)) from err

    if not 200 <= status < 300:
        raise HttpStatusError(status, payload.decode("utf-8", errors="replace")[:BODY_EXCERPT_CHARS])
    return payload
