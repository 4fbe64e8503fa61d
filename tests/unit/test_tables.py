import pytest

from chaindbg.tables import (
    LAST_EVENT_CODE,
    NETDEV_FEATURES,
    NETDEV_FLAGS,
    EventKind,
    SymbolTable,
    event_name,
    parse_event,
)


def test_event_names_are_one_indexed():
    assert event_name(1) == "UP"
    assert event_name(4) == "CHANGE"
    assert event_name(EventKind.CHANGEINFODATA) == "CHANGEINFODATA"
    assert LAST_EVENT_CODE == 24


def test_event_name_unknown_codes():
    assert event_name(0) is None
    assert event_name(-1) is None
    assert event_name(LAST_EVENT_CODE + 1) is None


def test_parse_event_accepts_names_and_numbers():
    assert parse_event("CHANGE") == 4
    assert parse_event("netdev_changemtu") == 7
    assert parse_event("0x17") == 23
    assert parse_event(99) == 99

    with pytest.raises(ValueError):
        parse_event("NOT_AN_EVENT")


def test_lookup_stops_at_terminator():
    table = SymbolTable.of("gap", ["A", None, "C"])

    assert table.lookup(0) == "A"
    assert table.lookup(1) is None
    assert table.lookup(2) is None
    assert table.lookup(3) is None
    assert table.known_length() == 1


def test_builtin_table_sizes():
    assert len(NETDEV_FLAGS) == 19
    assert NETDEV_FLAGS.lookup(18) == "IFF_ECHO"
    assert len(NETDEV_FEATURES) == 39
    assert NETDEV_FEATURES.known_length() == len(NETDEV_FEATURES)
    assert NETDEV_FEATURES.lookup(38) == "busy-poll"
