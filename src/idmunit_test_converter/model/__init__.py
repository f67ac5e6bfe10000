"""IdMUnit test model exports."""

from .constants import (
    COMMENT_OPERATION,
    FORMULA_META_TAG,
    OPERATION_CONFIG_PREFIX,
    REQUIRED_CONFIG_HEADERS,
    SECTION_DELIMITER,
    OperationConfigHeader,
)
from .group_numbers import normalize_group_numbers
from .model_serialization import (
    ModelFormatError,
    dumps_test,
    from_document,
    loads_test,
    to_document,
)
from .entities import Connector, ConnectorAttribute, IdmUnitTest, Operation, OperationData

__all__ = [
    "COMMENT_OPERATION",
    "FORMULA_META_TAG",
    "OPERATION_CONFIG_PREFIX",
    "REQUIRED_CONFIG_HEADERS",
    "SECTION_DELIMITER",
    "OperationConfigHeader",
    "Connector",
    "ConnectorAttribute",
    "IdmUnitTest",
    "Operation",
    "OperationData",
    "ModelFormatError",
    "dumps_test",
    "from_document",
    "loads_test",
    "normalize_group_numbers",
    "to_document",
]
