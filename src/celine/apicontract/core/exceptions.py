# celine/apicontract/core/exceptions.py
from __future__ import annotations

from pydantic import ValidationError


class ContractError(ValueError):
    """Malformed contract, or a lookup that the contract cannot satisfy."""


class RequestValidationError(ContractError):
    """An inbound request failed its endpoint schema.

    Attributes:
        location: Part of the request that failed (``path``, ``query``
            or ``body``).
        error: The underlying pydantic ``ValidationError``.
    """

    def __init__(self, location: str, error: ValidationError) -> None:
        self.location = location
        self.error = error
        super().__init__(f"Invalid request {location}: {error.error_count()} error(s)")

    def errors(self) -> list[dict]:
        return self.error.errors(include_url=False, include_context=False)
