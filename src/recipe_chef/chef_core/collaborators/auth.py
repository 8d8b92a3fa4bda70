"""Bearer-token verification used to personalize a chat turn."""

from typing import Mapping, Protocol

from ..exceptions import InvalidTokenError
from .models import UserIdentity


class AuthVerifier(Protocol):
    async def verify_token(self, token: str) -> UserIdentity:
        """Resolve ``token`` to a user or raise ``InvalidTokenError``."""
        ...


class StaticTokenVerifier:
    """Verifies tokens against a fixed ``token -> display name`` map."""

    def __init__(self, tokens: Mapping[str, str]) -> None:
        self._tokens = dict(tokens)

    async def verify_token(self, token: str) -> UserIdentity:
        if token.lower().startswith("bearer "):
            token = token[len("bearer ") :]
        display_name = self._tokens.get(token.strip())
        if display_name is None:
            raise InvalidTokenError("Invalid or expired token.")
        return UserIdentity(uid=token.strip(), display_name=display_name)
