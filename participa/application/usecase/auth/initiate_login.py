"""Initiate provider login use case."""

import secrets

from pydantic import BaseModel

from participa.domain.service import AuthService
from participa.domain.value import AuthProvider


class InitiateLoginRequest(BaseModel):
    """Initiate login request."""

    provider: AuthProvider


class InitiateLoginResponse(BaseModel):
    """Initiate login response."""

    authorization_url: str


class InitiateLoginUseCase:
    """Use case for starting an OAuth login with an identity provider."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: InitiateLoginRequest) -> InitiateLoginResponse:
        """Build the provider authorization URL.

        Raises:
            ValueError: If provider not supported
        """
        # State for CSRF protection, echoed back by the provider on callback
        state = secrets.token_urlsafe(32)
        url = await self.auth_service.initiate_login(request.provider, state)
        return InitiateLoginResponse(authorization_url=url)
