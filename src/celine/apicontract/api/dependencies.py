# celine/apicontract/api/dependencies.py
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from celine.apicontract.core.validation.request import ValidatedInputs


def get_inputs(request: Request) -> ValidatedInputs:
    """Validated inputs of the current request.

    Only available on endpoints registered through a ``ContractRouter``
    for a path/method present in the contract.
    """
    inputs = getattr(request.state, "inputs", None)
    if inputs is None:
        raise RuntimeError(
            f"No validated inputs for {request.method} {request.url.path}: "
            "the endpoint is not bound to a contract entry"
        )
    return inputs


Inputs = Annotated[ValidatedInputs, Depends(get_inputs)]
