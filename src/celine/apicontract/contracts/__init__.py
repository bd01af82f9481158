"""Contract model: methods, schemas, endpoint descriptors."""
from celine.apicontract.contracts.schema import EMPTY_SHAPE, EmptyShape, Schema
from celine.apicontract.contracts.endpoint import (
    DEFAULT,
    METHODS,
    EndpointDescriptor,
    Method,
    Parameters,
)
from celine.apicontract.contracts.contract import Contract, to_route_path, to_template_path

__all__ = [
    "Schema", "EmptyShape", "EMPTY_SHAPE",
    "Method", "METHODS", "DEFAULT",
    "Parameters", "EndpointDescriptor",
    "Contract", "to_route_path", "to_template_path",
]
