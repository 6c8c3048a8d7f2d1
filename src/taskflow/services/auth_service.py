"""Service for handling authentication-related operations."""

from __future__ import annotations

from typing import Optional

from taskflow.api.auth import AuthAdapter, AuthView
from taskflow.config import ConfigManager, get_config_manager
from taskflow.models import Authenticated, AuthResult, User
from taskflow.utils.logger import get_logger


class AuthService:
    """Signs users in through an AuthAdapter and keeps the session on disk."""

    def __init__(self, config_manager: ConfigManager, adapter: Optional[AuthAdapter] = None):
        self.config_manager = config_manager
        self.adapter = adapter

    async def authenticate(
        self,
        view: AuthView,
        email: str,
        password: str,
        first_name: Optional[str] = None,
    ) -> AuthResult:
        """Run login or signup and persist the session on success."""
        if self.adapter is None:
            raise RuntimeError("AuthService needs an AuthAdapter to sign in")

        result = await self.adapter.authenticate(view, email, password, first_name)
        if isinstance(result, Authenticated):
            self.config_manager.save_credentials(
                result.token,
                result.user.model_dump(by_alias=True, exclude_none=True),
            )
            get_logger("auth").info("signed in as %s", result.user.display_name)
        return result

    def token(self) -> Optional[str]:
        credentials = self.config_manager.load_credentials()
        if credentials:
            return credentials.get("token")
        return None

    def current_user(self) -> Optional[User]:
        """Return the stored user, if signed in."""
        credentials = self.config_manager.load_credentials()
        if not credentials or not credentials.get("token"):
            return None
        return User.model_validate(credentials.get("user") or {})

    def logout(self) -> None:
        self.config_manager.clear_credentials()

    @staticmethod
    def is_authenticated() -> bool:
        """Check if the user is authenticated."""
        credentials = get_config_manager().load_credentials()
        return bool(credentials and credentials.get("token"))
