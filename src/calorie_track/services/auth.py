"""Access token verification interface."""

from typing import Protocol

from calorie_track.domain.models import AuthUser


class TokenVerifier(Protocol):
    """Verifies bearer tokens issued by the identity provider."""

    def verify(self, token: str) -> AuthUser | None:
        """Return the user for a valid token, or None."""
