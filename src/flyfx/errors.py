"""
Error types

Every error raised by flyfx carries a machine-readable code, a human message
and an optional details dict, so callers can log or report them uniformly.
"""

from typing import Optional


class FlyFxError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(FlyFxError):
    """Invalid transit parameters; raised before anything is scheduled"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="INVALID_CONFIGURATION",
            message=message,
            details=details,
        )


class ElementNotFoundError(ConfigurationError):
    """Element ID doesn't exist on the stage"""
    def __init__(self, element_id: str):
        super().__init__(
            message=f"Element '{element_id}' not found",
            details={"element_id": element_id},
        )
        self.code = "ELEMENT_NOT_FOUND"


class SessionStateError(FlyFxError):
    """Illegal AnimationSession phase transition"""
    def __init__(self, session_id: int, current: str, requested: str):
        super().__init__(
            code="INVALID_SESSION_STATE",
            message=f"Session {session_id} cannot go from {current} to {requested}",
            details={"session_id": session_id, "current": current, "requested": requested},
        )


class TransformParseError(FlyFxError):
    """Transform string could not be parsed"""
    def __init__(self, value: str, reason: str):
        super().__init__(
            code="INVALID_TRANSFORM",
            message=f"Cannot parse transform '{value}': {reason}",
            details={"transform": value, "reason": reason},
        )
