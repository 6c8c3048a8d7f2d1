"""Authentication adapter for the record service.

The service's own sign-in flow reports back through a success callback with
a user object, or an error callback with whatever went wrong. The adapter
collapses both into an :data:`~taskflow.models.AuthResult`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal, Optional

from taskflow.api.client import RecordServiceClient
from taskflow.exceptions import RecordServiceError
from taskflow.models import Authenticated, AuthResult, Failed, User
from taskflow.utils.logger import get_logger

AuthView = Literal["login", "signup"]


class AuthAdapter(ABC):
    """Narrow interface the rest of TaskFlow uses to sign a user in."""

    @abstractmethod
    async def authenticate(
        self,
        view: AuthView,
        email: str,
        password: str,
        first_name: Optional[str] = None,
    ) -> AuthResult:
        """Run the login or signup flow.

        Returns:
            Authenticated on success, Failed otherwise. Service failures are
            reported as Failed, never raised.
        """


class RecordServiceAuthAdapter(AuthAdapter):
    """AuthAdapter talking to the record service auth endpoints."""

    def __init__(self, client: RecordServiceClient):
        self.client = client

    async def authenticate(
        self,
        view: AuthView,
        email: str,
        password: str,
        first_name: Optional[str] = None,
    ) -> AuthResult:
        try:
            if view == "signup":
                payload = await self.client.signup(email, password, first_name)
            else:
                payload = await self.client.login(email, password)
        except RecordServiceError as e:
            get_logger("auth").error("Authentication failed: %s", e)
            return Failed(reason=str(e))

        return self.on_success(payload)

    @staticmethod
    def on_success(payload: dict) -> AuthResult:
        """Translate the service's success payload into a result."""
        token = payload.get("token")
        user_data = payload.get("user")
        if not token or not isinstance(user_data, dict):
            return Failed(reason="Record service returned an incomplete session")
        return Authenticated(user=User.model_validate(user_data), token=token)
