"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed input, or a failed bot-check.

    Carries per-field messages so the caller can re-prompt the same form.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        details = ", ".join(f"{field}: {message}" for field, message in errors.items())
        super().__init__(f"Validation failed ({details})")


class ConflictError(DomainError):
    """Raised when a username or email is already taken by another account."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} is already taken")


class DuplicateKeyError(DomainError):
    """Raised by repositories when a storage uniqueness constraint fires.

    ``field`` names the violated constraint target: ``username``, ``email``,
    ``identity`` (provider + external id) or ``account_provider``.
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate value for unique field: {field}")


class InvalidProviderResponse(DomainError):
    """Raised when an identity provider returns malformed profile claims."""

    pass


class InvalidTokenError(DomainError):
    """Raised when a confirmation or reset token is unknown or already spent."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a confirmation or reset token is past its expiry."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class UnconfirmedAccountError(DomainError):
    """Raised when a session is requested for an account with an unconfirmed email."""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account {account_id} has not confirmed its email")


class IncompleteSignupError(DomainError):
    """Raised when a session is requested before signup completion has finished."""

    def __init__(self, account_id: str, signup_state: str):
        self.account_id = account_id
        self.signup_state = signup_state
        super().__init__(
            f"Account {account_id} has not finished signing up ({signup_state})"
        )


class InvalidCredentialsError(DomainError):
    """Raised on a failed password sign-in.

    The message never reveals whether the email exists.
    """

    def __init__(self):
        super().__init__("Invalid email or password")


class InvalidSignupTransition(DomainError):
    """Raised when the signup completion state machine rejects an event."""

    def __init__(self, state: str, event: str):
        self.state = state
        self.event = event
        super().__init__(f"Signup event {event} is not allowed in state {state}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
