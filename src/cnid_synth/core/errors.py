"""Exceptions raised by the identity codec and the generator."""

from typing import Optional


class ValidationError(ValueError):
    """Malformed caller input.

    Attributes:
        field: Name of the offending input (area_code, birthday, gender, ...).
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
