"""Contract-driven request/response validation for FastAPI servers and httpx clients."""
from celine.apicontract.contracts import (
    METHODS,
    Contract,
    EndpointDescriptor,
    Method,
    Parameters,
    Schema,
)
from celine.apicontract.core.exceptions import ContractError, RequestValidationError
from celine.apicontract.core.validation import ValidatedInputs
from celine.apicontract.api import ContractRouter, Inputs
from celine.apicontract.clients import ContractClient, build_request, is_error_of

__all__ = [
    "Contract", "EndpointDescriptor", "Parameters", "Schema", "Method", "METHODS",
    "ContractError", "RequestValidationError",
    "ValidatedInputs",
    "ContractRouter", "Inputs",
    "ContractClient", "build_request", "is_error_of",
]
