"""Authentication gate.

Identity is owned by an external provider; this service only needs to
know which user, if any, a request belongs to. An Authenticator is any
callable taking the request and returning a user id or None.
"""

from typing import Callable

from fastapi import Request

Authenticator = Callable[[Request], str | None]


def bearer_token(request: Request) -> str | None:
    """Extract the bearer token from the Authorization header."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class TokenAuthenticator:
    """Resolve bearer tokens issued by the identity provider to user ids."""

    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    def __call__(self, request: Request) -> str | None:
        token = bearer_token(request)
        if token is None:
            return None
        return self._tokens.get(token)
