"""Supabase Auth access token verifier."""

import logging
from dataclasses import dataclass

from supabase import Client

from calorie_track.domain.models import AuthUser
from calorie_track.services.auth import TokenVerifier

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseTokenVerifier(TokenVerifier):
    """Verifies access tokens against Supabase Auth."""

    client: Client

    def verify(self, token: str) -> AuthUser | None:
        """Return the token's user, or None when Supabase rejects it."""
        try:
            response = self.client.auth.get_user(token)
        except Exception as exc:
            _logger.warning("Token verification failed: %s", exc)
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        metadata = getattr(user, "user_metadata", None) or {}
        return AuthUser(
            uid=str(user.id),
            email=str(getattr(user, "email", None) or ""),
            display_name=str(
                metadata.get("display_name") or metadata.get("name") or ""
            ),
        )
