"""
Error taxonomy shared by services and the HTTP layer

Each exception knows the HTTP status and the stable code the API renders,
so routers never translate errors by hand.
"""


class VoiceStudioError(Exception):
    """Base class for all application errors"""
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(VoiceStudioError):
    """Raised when input shape or content is invalid"""
    status_code = 400
    code = "validation_error"


class InsufficientCreditsError(ValidationError):
    """Raised when the caller cannot pay for a conversion"""
    status_code = 402
    code = "insufficient_credits"


class AuthenticationError(VoiceStudioError):
    """Raised when an identity credential fails verification"""
    status_code = 401
    code = "authentication_failed"


class InvalidSessionError(VoiceStudioError):
    """Raised when a session token is missing, malformed, tampered or expired"""
    status_code = 401
    code = "invalid_session"


class AuthorizationError(VoiceStudioError):
    """Raised when the caller lacks rights for a resource"""
    status_code = 403
    code = "forbidden"


class NotFoundError(VoiceStudioError):
    """Raised when a resource identifier is unknown"""
    status_code = 404
    code = "not_found"


class InternalError(VoiceStudioError):
    """Raised on unexpected failures during background processing"""
    status_code = 500
    code = "internal_error"


class InvalidTransitionError(InternalError):
    """Raised when a job status change would move backwards or leave a terminal state"""
    pass


class SynthesisError(InternalError):
    """Raised by a synthesizer when audio cannot be produced"""
    pass
