"""Attribute stacker column normalization."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from .entities import Connector


def normalize_group_numbers(connectors: Sequence[Connector]) -> tuple[Connector, ...]:
    """Rewrite group numbers to a dense zero-based sequence.

    Distinct group numbers across every connector are sorted and renumbered
    0..n-1, so relative column order is preserved while gaps left by sparse
    sheet columns disappear.
    """
    dense = _dense_index(
        attribute.group_num for connector in connectors for attribute in connector.attributes
    )
    return tuple(
        replace(
            connector,
            attributes=tuple(
                replace(attribute, group_num=dense[attribute.group_num])
                for attribute in connector.attributes
            ),
        )
        for connector in connectors
    )


def _dense_index(group_nums: Iterable[int]) -> dict[int, int]:
    return {raw: index for index, raw in enumerate(sorted(set(group_nums)))}
