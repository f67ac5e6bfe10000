"""JSON document mapping for IdMUnit tests.

Keys use the camelCase names of the existing ``.idmunit`` JSON files. Fields
holding ``None`` are omitted rather than written as ``null``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .entities import Connector, ConnectorAttribute, IdmUnitTest, Operation, OperationData

_OPERATION_FIELDS: tuple[tuple[str, str], ...] = (
    ("comment", "comment"),
    ("operation", "operation"),
    ("target", "target"),
    ("wait_interval", "waitInterval"),
    ("retry_count", "retryCount"),
    ("disabled", "disabled"),
    ("failure_expected", "failureExpected"),
    ("critical", "critical"),
    ("repeat_range", "repeatRange"),
)


class ModelFormatError(ValueError):
    """Raised when a JSON document does not describe an IdMUnit test."""


def to_document(test: IdmUnitTest) -> dict[str, Any]:
    """Convert a test into a JSON-compatible mapping."""
    document: dict[str, Any] = {"name": test.name}
    _put(document, "title", test.title)
    _put(document, "desc", test.desc)
    document["connectors"] = [_connector_to_dict(connector) for connector in test.connectors]
    document["operations"] = [_operation_to_dict(operation) for operation in test.operations]
    _put(document, "hasIsCriticalConfigHeader", True if test.has_is_critical_header else None)
    _put(
        document,
        "hasRepeatOpRangeConfigHeader",
        True if test.has_repeat_op_range_header else None,
    )
    return document


def from_document(document: Any) -> IdmUnitTest:
    """Build a test from a decoded JSON mapping."""
    mapping = _require_mapping(document, "test")
    return IdmUnitTest(
        name=_require_string(mapping.get("name"), "name"),
        title=_optional_string(mapping.get("title"), "title"),
        desc=_optional_string(mapping.get("desc"), "desc"),
        connectors=tuple(
            _connector_from_dict(item) for item in _list(mapping.get("connectors"), "connectors")
        ),
        operations=tuple(
            _operation_from_dict(item) for item in _list(mapping.get("operations"), "operations")
        ),
        has_is_critical_header=_flag(mapping.get("hasIsCriticalConfigHeader")),
        has_repeat_op_range_header=_flag(mapping.get("hasRepeatOpRangeConfigHeader")),
    )


def dumps_test(test: IdmUnitTest) -> str:
    """Serialize a test as indented JSON text."""
    return json.dumps(to_document(test), indent=2, ensure_ascii=False) + "\n"


def loads_test(text: str) -> IdmUnitTest:
    """Deserialize a test from JSON text."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ModelFormatError(f"Invalid test JSON: {exc}") from exc
    return from_document(document)


def _connector_to_dict(connector: Connector) -> dict[str, Any]:
    return {
        "name": connector.name,
        "attributes": [
            {"name": attribute.name, "groupNum": attribute.group_num}
            for attribute in connector.attributes
        ],
    }


def _operation_to_dict(operation: Operation) -> dict[str, Any]:
    document: dict[str, Any] = {}
    for attribute_name, key in _OPERATION_FIELDS:
        _put(document, key, getattr(operation, attribute_name))
    if operation.data is not None:
        document["data"] = [_operation_data_to_dict(entry) for entry in operation.data]
    return document


def _operation_data_to_dict(entry: OperationData) -> dict[str, Any]:
    document: dict[str, Any] = {"attribute": entry.attribute, "value": list(entry.value)}
    if entry.meta:
        document["meta"] = list(entry.meta)
    return document


def _connector_from_dict(document: Any) -> Connector:
    mapping = _require_mapping(document, "connector")
    attributes = []
    for item in _list(mapping.get("attributes"), "connector.attributes"):
        attribute = _require_mapping(item, "connector attribute")
        group_num = attribute.get("groupNum")
        if isinstance(group_num, bool) or not isinstance(group_num, int):
            raise ModelFormatError("connector attribute groupNum must be an integer.")
        attributes.append(
            ConnectorAttribute(
                name=_require_string(attribute.get("name"), "connector attribute name"),
                group_num=group_num,
            )
        )
    return Connector(
        name=_require_string(mapping.get("name"), "connector name"),
        attributes=tuple(attributes),
    )


def _operation_from_dict(document: Any) -> Operation:
    mapping = _require_mapping(document, "operation")
    fields = {
        attribute_name: _optional_string(mapping.get(key), f"operation.{key}")
        for attribute_name, key in _OPERATION_FIELDS
    }
    raw_data = mapping.get("data")
    data = None
    if raw_data is not None:
        data = tuple(_operation_data_from_dict(item) for item in _list(raw_data, "operation.data"))
    return Operation(**fields, data=data)


def _operation_data_from_dict(document: Any) -> OperationData:
    mapping = _require_mapping(document, "operation data")
    values = tuple(
        _require_string(item, "operation data value")
        for item in _list(mapping.get("value"), "operation data value")
    )
    if not values:
        raise ModelFormatError("operation data value must not be empty.")
    raw_meta = mapping.get("meta")
    meta = None
    if raw_meta is not None:
        meta = tuple(
            _require_string(item, "operation data meta") for item in _list(raw_meta, "meta")
        )
    return OperationData(
        attribute=_require_string(mapping.get("attribute"), "operation data attribute"),
        value=values,
        meta=meta or None,
    )


def _put(document: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        document[key] = value


def _flag(value: Any) -> bool | None:
    if value is None or value is False:
        return None
    if value is True:
        return True
    raise ModelFormatError(f"Header flags must be booleans, got {value!r}.")


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ModelFormatError(f"{label} must be a JSON object.")
    return value


def _list(value: Any, label: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelFormatError(f"{label} must be a JSON array.")
    return value


def _require_string(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise ModelFormatError(f"{label} must be a string.")
    return value


def _optional_string(value: Any, label: str) -> str | None:
    if value is None:
        return None
    return _require_string(value, label)
