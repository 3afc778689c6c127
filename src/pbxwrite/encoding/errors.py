"""EncodeError — the single failure kind of the serialization engine."""

from __future__ import annotations


class EncodeError(Exception):
    """Raised when a value cannot be represented in the plist dialect.

    The engine itself only raises this for values outside the supported
    category set. Custom ``Serializable`` types signal a refusal through
    :meth:`custom`.
    """

    def __init__(self, message: str = "Error") -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def custom(cls, message: object) -> EncodeError:
        """Build an error from any displayable message."""
        return cls(str(message))
