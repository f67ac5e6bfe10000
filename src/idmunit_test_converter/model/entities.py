"""Normalized IdMUnit test entities."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import COMMENT_OPERATION, FORMULA_META_TAG


@dataclass(frozen=True)
class ConnectorAttribute:
    """Attribute name and the shared column slot it occupies."""

    name: str
    group_num: int


@dataclass(frozen=True)
class Connector:
    """Target system referenced by operations."""

    name: str
    attributes: tuple[ConnectorAttribute, ...] = ()


@dataclass(frozen=True)
class OperationData:
    """One attribute assignment of an operation row."""

    attribute: str
    value: tuple[str, ...]
    meta: tuple[str, ...] | None = None

    @property
    def is_formula(self) -> bool:
        return self.meta is not None and FORMULA_META_TAG in self.meta


@dataclass(frozen=True)
class Operation:  # pylint: disable=too-many-instance-attributes
    """One test step, or a comment pseudo-step."""

    comment: str | None = None
    operation: str | None = None
    target: str | None = None
    wait_interval: str | None = None
    retry_count: str | None = None
    disabled: str | None = None
    failure_expected: str | None = None
    critical: str | None = None
    repeat_range: str | None = None
    data: tuple[OperationData, ...] | None = None

    @property
    def is_comment(self) -> bool:
        return (self.operation or "").strip() == COMMENT_OPERATION


@dataclass(frozen=True)
class IdmUnitTest:
    """One test suite, converted from or to one sheet.

    The two header flags are either ``True`` or ``None``; they are never
    ``False`` so that serialized tests only mention headers that exist.
    """

    name: str
    title: str | None = None
    desc: str | None = None
    connectors: tuple[Connector, ...] = field(default_factory=tuple)
    operations: tuple[Operation, ...] = field(default_factory=tuple)
    has_is_critical_header: bool | None = None
    has_repeat_op_range_header: bool | None = None
