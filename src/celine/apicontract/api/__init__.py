"""Server side: contract-aware FastAPI routing."""
from celine.apicontract.api.dependencies import Inputs, get_inputs
from celine.apicontract.api.errors import ErrorHandler, default_error_handler
from celine.apicontract.api.router import ContractRoute, ContractRouter

__all__ = [
    "ContractRouter", "ContractRoute",
    "Inputs", "get_inputs",
    "ErrorHandler", "default_error_handler",
]
