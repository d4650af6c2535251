from __future__ import annotations

import httpx

from career_graph import __version__

USER_AGENT = f"career-graph/{__version__}"


def default_timeout(read: float = 60.0) -> httpx.Timeout:
    # only `read` varies per client
    return httpx.Timeout(connect=10.0, read=read, write=20.0, pool=10.0)


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=50, max_keepalive_connections=10)


def default_headers(extra: dict[str, str] | None = None) -> dict[str, str]:
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    headers.update(extra or {})
    return headers


class HttpClientFactory:
    """Creates shared httpx clients for outbound API calls.

    One client per engine for the life of the process. `transport` is
    injectable so tests can swap in `httpx.MockTransport`.
    """

    @staticmethod
    def client(
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        *,
        read_timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url or "",
            headers=default_headers(headers),
            timeout=default_timeout(read_timeout),
            limits=default_limits(),
            follow_redirects=True,
            transport=transport,
        )
