"""Attribute stacker normalization tests."""

from __future__ import annotations

from idmunit_test_converter.model import Connector, ConnectorAttribute, normalize_group_numbers


def _connector(name: str, *attributes: tuple[str, int]) -> Connector:
    return Connector(
        name=name,
        attributes=tuple(ConnectorAttribute(attr, group_num) for attr, group_num in attributes),
    )


def test_sparse_group_numbers_become_dense_across_connectors() -> None:
    connectors = [
        _connector("AD", ("cn", 7), ("sn", 9)),
        _connector("LDAP", ("uid", 12), ("cn", 7)),
    ]

    normalized = normalize_group_numbers(connectors)

    assert [[(a.name, a.group_num) for a in c.attributes] for c in normalized] == [
        [("cn", 0), ("sn", 1)],
        [("uid", 2), ("cn", 0)],
    ]


def test_normalization_is_idempotent() -> None:
    connectors = [_connector("AD", ("cn", 4), ("sn", 10)), _connector("DB", ("id", 8))]

    once = normalize_group_numbers(connectors)

    assert normalize_group_numbers(once) == once


def test_connectors_without_attributes_are_kept() -> None:
    connectors = [_connector("Empty"), _connector("AD", ("cn", 3))]

    normalized = normalize_group_numbers(connectors)

    assert normalized[0] == Connector(name="Empty")
    assert normalized[1].attributes == (ConnectorAttribute("cn", 0),)
