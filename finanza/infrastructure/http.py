"""Minimal HTTP GET helpers for outbound lookups."""

import json
from urllib.request import Request, urlopen

USER_AGENT = "Finanza/1.0"


def fetch_text(url: str, timeout: float, accept: str = "text/html") -> str:
    """Return the body of ``url`` decoded as text.

    Raises:
        OSError: On connection errors, timeouts and non-2xx responses.
    """
    request = Request(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": accept},
    )
    with urlopen(request, timeout=timeout) as response:
        charset = response.headers.get_content_charset() or "utf-8"
        return response.read().decode(charset, errors="replace")


def fetch_json(url: str, timeout: float):
    """Return the JSON document at ``url``.

    Raises:
        OSError: On connection errors, timeouts and non-2xx responses.
        ValueError: If the body is not JSON.
    """
    return json.loads(fetch_text(url, timeout, accept="application/json"))


__all__ = ["fetch_text", "fetch_json", "USER_AGENT"]
