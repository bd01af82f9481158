"""Client side: contract-driven httpx client and error classification."""
from celine.apicontract.clients.client import ContractClient
from celine.apicontract.clients.errors import error_body, is_error_of
from celine.apicontract.clients.request_builder import OutboundRequest, build_request

__all__ = [
    "ContractClient",
    "build_request", "OutboundRequest",
    "is_error_of", "error_body",
]
