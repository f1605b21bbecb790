"""Sign out use case."""

from pydantic import BaseModel

from participa.application.usecase.base import BaseUseCase
from participa.domain.service import SessionService

SIGNED_OUT_MESSAGE = "Signed out successfully."


class SignOutRequest(BaseModel):
    """Sign out request."""

    token: str | None = None  # Session JWT from cookie, if any


class SignOutResponse(BaseModel):
    """Sign out always succeeds."""

    success: bool = True
    already_signed_out: bool
    message: str = SIGNED_OUT_MESSAGE


class SignOutUseCase(BaseUseCase[SignOutRequest, SignOutResponse]):
    """Use case for destroying the caller's session."""

    def __init__(self, session_service: SessionService) -> None:
        self.session_service = session_service

    async def execute(self, request: SignOutRequest) -> SignOutResponse:
        result = await self.session_service.sign_out(request.token)
        return SignOutResponse(already_signed_out=result.already_signed_out)
