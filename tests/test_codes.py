"""Tests for the code tables and lookup."""

import logging
from logging.handlers import SysLogHandler

import pytest

from syslog_access.codes import (
    FACILITIES, PRIORITIES, CodeEntry, CodeTable, find, lookup, lookup_by_host_code,
)


def _table(*pairs):
    return CodeTable([CodeEntry(code, 0, id, "", "") for id, code in pairs])


@pytest.fixture
def small_table():
    return _table(("daemon", 3), ("local3", 19), ("mail", 2))


class TestLookup:
    def test_present_id(self, small_table):
        assert lookup(small_table, "local3", 3) == 19

    def test_unknown_id_returns_default(self, small_table):
        assert lookup(small_table, "nonexistent", 3) == 3

    def test_none_id_returns_default(self, small_table):
        assert lookup(small_table, None, 3) == 3

    def test_empty_table_returns_default(self):
        assert lookup(CodeTable([]), "daemon", 3) == 3

    def test_none_table_returns_default(self):
        assert lookup(None, "daemon", 3) == 3

    def test_present_ids_ignore_default(self, small_table):
        for entry in small_table:
            assert lookup(small_table, entry.id, -1) == entry.code
            assert lookup(small_table, entry.id, 999) == entry.code

    def test_first_and_last_entries(self, small_table):
        assert lookup(small_table, "daemon", -1) == 3
        assert lookup(small_table, "mail", -1) == 2

    def test_ids_between_entries(self, small_table):
        for id in ("a", "e", "local", "local30", "zzz", ""):
            assert lookup(small_table, id, -1) == -1

    def test_embedded_nul_returns_default(self, small_table):
        assert lookup(small_table, "dae\x00mon", 3) == 3
        assert lookup(FACILITIES, "local\x004", -1) == -1
        assert find(FACILITIES, "\x00") is None

    def test_repeated_calls_are_identical(self, small_table):
        results = {lookup(small_table, "local3", 0) for _ in range(10)}
        assert results == {19}


class TestPriorityTable:
    def test_warning(self):
        assert lookup(PRIORITIES, "warning", -1) == SysLogHandler.LOG_WARNING

    def test_uppercase_does_not_match(self):
        assert lookup(PRIORITIES, "WARNING", -1) == -1

    def test_all_severities(self):
        expected = {
            "emergency": 0, "alert": 1, "critical": 2, "error": 3,
            "warning": 4, "notice": 5, "info": 6, "debug": 7,
        }
        for id, code in expected.items():
            assert lookup(PRIORITIES, id, -1) == code

    def test_alert_has_no_host_id(self):
        assert find(PRIORITIES, "alert").host_id == ""


class TestFacilityTable:
    def test_known_facilities(self):
        assert lookup(FACILITIES, "daemon", -1) == 3
        assert lookup(FACILITIES, "local3", -1) == 19
        assert lookup(FACILITIES, "print", -1) == SysLogHandler.LOG_LPR
        assert lookup(FACILITIES, "authorization", -1) == SysLogHandler.LOG_AUTHPRIV

    def test_every_entry_resolves(self):
        for entry in FACILITIES:
            assert lookup(FACILITIES, entry.id, -1) == entry.code

    def test_entries_have_descriptions(self):
        assert all(e.info for e in FACILITIES)


class TestCodeTable:
    def test_sorts_on_construction(self):
        table = _table(("mail", 2), ("daemon", 3), ("local3", 19))
        assert table.ids == ["daemon", "local3", "mail"]
        assert lookup(table, "daemon", -1) == 3

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="duplicate"):
            _table(("mail", 2), ("mail", 3))

    def test_empty_table_is_falsy(self):
        assert not CodeTable([])
        assert len(CodeTable([])) == 0

    def test_entries_are_frozen(self, small_table):
        with pytest.raises(AttributeError):
            small_table[0].code = 42

    def test_no_mutation_api(self, small_table):
        assert not hasattr(small_table, "append")
        assert isinstance(small_table.entries, tuple)


class TestFind:
    def test_returns_entry(self):
        entry = find(PRIORITIES, "error")
        assert entry.code == SysLogHandler.LOG_ERR
        assert entry.host_code == logging.ERROR
        assert entry.host_id == "ERROR"

    def test_missing(self):
        assert find(PRIORITIES, "verbose") is None
        assert find(None, "error") is None


class TestLookupByHostCode:
    def test_standard_levels(self):
        assert lookup_by_host_code(PRIORITIES, logging.DEBUG, -1) == SysLogHandler.LOG_DEBUG
        assert lookup_by_host_code(PRIORITIES, logging.INFO, -1) == SysLogHandler.LOG_INFO
        assert lookup_by_host_code(PRIORITIES, logging.WARNING, -1) == SysLogHandler.LOG_WARNING
        assert lookup_by_host_code(PRIORITIES, logging.ERROR, -1) == SysLogHandler.LOG_ERR

    def test_critical_is_not_emergency(self):
        assert lookup_by_host_code(PRIORITIES, logging.CRITICAL, -1) == SysLogHandler.LOG_CRIT

    def test_custom_level_rounds_down(self):
        assert lookup_by_host_code(PRIORITIES, 35, -1) == SysLogHandler.LOG_WARNING

    def test_below_debug_returns_default(self):
        assert lookup_by_host_code(PRIORITIES, 5, -1) == -1

    def test_none_table(self):
        assert lookup_by_host_code(None, logging.ERROR, 6) == 6
