"""Request and response validation against endpoint descriptors."""
from celine.apicontract.core.validation.request import (
    RequestValidator,
    ValidatedInputs,
    coerce_query_booleans,
)
from celine.apicontract.core.validation.response import (
    OUT_OF_SPEC_BODY,
    OUT_OF_SPEC_STATUS,
    ResponseInterceptor,
)

__all__ = [
    "RequestValidator", "ValidatedInputs", "coerce_query_booleans",
    "ResponseInterceptor", "OUT_OF_SPEC_BODY", "OUT_OF_SPEC_STATUS",
]
