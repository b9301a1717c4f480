"""Best-effort client identity for rate limiting and opener rotation.

The service usually runs behind a proxy or a serverless edge, so the socket
peer is the proxy. The first ``X-Forwarded-For`` hop wins, then
``X-Real-IP``, then the ``"unknown"`` sentinel, which all anonymous callers
share. Headers are client-controlled; the key is not an authentication
boundary.
"""

from __future__ import annotations

from fastapi import Request

UNKNOWN_CLIENT = "unknown"


def resolve_client_key(forwarded_for: str | None, real_ip: str | None) -> str:
    """Derive the client key from proxy headers.

    Args:
        forwarded_for: Raw ``X-Forwarded-For`` header value.
        real_ip: Raw ``X-Real-IP`` header value.

    Returns:
        Non-empty client key.

    Examples:
        >>> resolve_client_key("203.0.113.7, 10.0.0.1", None)
        '203.0.113.7'
        >>> resolve_client_key(None, "198.51.100.2")
        '198.51.100.2'
        >>> resolve_client_key(" , ", "")
        'unknown'
    """
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return UNKNOWN_CLIENT


def get_client_key(request: Request) -> str:
    """FastAPI dependency returning the client key for the current request."""
    return resolve_client_key(
        request.headers.get("x-forwarded-for"),
        request.headers.get("x-real-ip"),
    )
