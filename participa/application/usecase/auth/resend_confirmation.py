"""Resend confirmation use case."""

from pydantic import BaseModel

from participa.application.usecase.base import BaseUseCase
from participa.domain.service import ConfirmationGate

RESEND_MESSAGE = (
    "If your email address exists in our database, you will receive an email "
    "with instructions for how to confirm your email address in a few minutes."
)


class ResendConfirmationRequest(BaseModel):
    """Resend confirmation request."""

    email: str


class ResendConfirmationResponse(BaseModel):
    """Identical whether or not an email was sent."""

    message: str = RESEND_MESSAGE


class ResendConfirmationUseCase(
    BaseUseCase[ResendConfirmationRequest, ResendConfirmationResponse]
):
    """Use case for re-sending the confirmation link."""

    def __init__(self, confirmation_gate: ConfirmationGate) -> None:
        self.confirmation_gate = confirmation_gate

    async def execute(
        self, request: ResendConfirmationRequest
    ) -> ResendConfirmationResponse:
        await self.confirmation_gate.resend(request.email)
        return ResendConfirmationResponse()
