"""Static code tables — syslog facility and severity names to numeric codes.

Tables are sorted by id with ``locale.strcoll`` and searched with the same
comparison. Python starts in the "C" collation locale, so unless the
application calls ``locale.setlocale`` matching is ordinal and case-sensitive.
"""

import locale
import logging
from bisect import bisect_left
from dataclasses import dataclass
from functools import cmp_to_key
from logging.handlers import SysLogHandler

_collate = cmp_to_key(locale.strcoll)


def _entry_key(entry: "CodeEntry"):
    return _collate(entry.id)


@dataclass(frozen=True)
class CodeEntry:
    code: int       # value in the target system (unshifted syslog code)
    host_code: int  # matching value on the host side, e.g. a logging level
    id: str
    host_id: str
    info: str


class CodeTable:
    """Read-only sequence of CodeEntry, sorted by id in collation order."""

    __slots__ = ("_entries",)

    def __init__(self, entries):
        ordered = sorted(entries, key=_entry_key)
        for prev, cur in zip(ordered, ordered[1:]):
            if locale.strcoll(prev.id, cur.id) == 0:
                raise ValueError(f"duplicate code id: {cur.id!r}")
        self._entries = tuple(ordered)

    @property
    def entries(self) -> tuple[CodeEntry, ...]:
        return self._entries

    @property
    def ids(self) -> list[str]:
        return [e.id for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> CodeEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"CodeTable({self.ids!r})"


def find(table: CodeTable | None, id: str | None) -> CodeEntry | None:
    """Binary-search *table* for an entry whose id collates equal to *id*."""
    if not table or id is None:
        return None
    entries = table.entries
    try:
        i = bisect_left(entries, _collate(id), key=_entry_key)
        if i < len(entries) and locale.strcoll(entries[i].id, id) == 0:
            return entries[i]
    except ValueError:
        # strcoll rejects embedded NUL characters; no table id contains one.
        return None
    return None


def lookup(table: CodeTable | None, id: str | None, default: int) -> int:
    """Return the code stored for *id*, or *default*.

    A missing table, an empty table, a missing id and an unknown id all
    resolve to *default*; this function never raises.
    """
    entry = find(table, id)
    if entry is None:
        return default
    return entry.code


def lookup_by_host_code(table: CodeTable | None, host_code: int, default: int) -> int:
    """Map a host code (e.g. a logging level) back to a table code.

    Picks the entries with the highest host code not above *host_code*, and
    among those the largest code, i.e. the least severe syslog priority.
    """
    best = None
    for entry in table or ():
        if entry.host_code > host_code or not entry.host_id:
            continue
        if best is None or (entry.host_code, entry.code) > (best.host_code, best.code):
            best = entry
    if best is None:
        return default
    return best.code


FACILITIES = CodeTable([
    CodeEntry(SysLogHandler.LOG_AUTH, 0, "authentication", "", "Security (authorization)"),
    CodeEntry(SysLogHandler.LOG_AUTHPRIV, 0, "authorization", "", "Private security (authorization)"),
    CodeEntry(SysLogHandler.LOG_CRON, 0, "cron", "", "Cron and At"),
    CodeEntry(SysLogHandler.LOG_DAEMON, 0, "daemon", "", "A miscellaneous system daemon"),
    CodeEntry(SysLogHandler.LOG_FTP, 0, "ftp", "", "Ftp server"),
    CodeEntry(SysLogHandler.LOG_LOCAL0, 0, "local0", "", "Locally defined, 0"),
    CodeEntry(SysLogHandler.LOG_LOCAL1, 0, "local1", "", "Locally defined, 1"),
    CodeEntry(SysLogHandler.LOG_LOCAL2, 0, "local2", "", "Locally defined, 2"),
    CodeEntry(SysLogHandler.LOG_LOCAL3, 0, "local3", "", "Locally defined, 3"),
    CodeEntry(SysLogHandler.LOG_LOCAL4, 0, "local4", "", "Locally defined, 4"),
    CodeEntry(SysLogHandler.LOG_LOCAL5, 0, "local5", "", "Locally defined, 5"),
    CodeEntry(SysLogHandler.LOG_LOCAL6, 0, "local6", "", "Locally defined, 6"),
    CodeEntry(SysLogHandler.LOG_LOCAL7, 0, "local7", "", "Locally defined, 7"),
    CodeEntry(SysLogHandler.LOG_LPR, 0, "print", "", "Central printer"),
    CodeEntry(SysLogHandler.LOG_MAIL, 0, "mail", "", "Mail"),
    CodeEntry(SysLogHandler.LOG_NEWS, 0, "news", "", "Network news (e.g. Usenet)"),
    CodeEntry(SysLogHandler.LOG_SYSLOG, 0, "syslog", "", "Syslog"),
    CodeEntry(SysLogHandler.LOG_USER, 0, "user", "", "A miscellaneous user process"),
    CodeEntry(SysLogHandler.LOG_UUCP, 0, "uucp", "", "UUCP"),
])

# alert has no host-side name: no logging level sits above CRITICAL.
PRIORITIES = CodeTable([
    CodeEntry(SysLogHandler.LOG_ALERT, logging.CRITICAL, "alert", "",
              "Action on the message must be taken immediately."),
    CodeEntry(SysLogHandler.LOG_CRIT, logging.CRITICAL, "critical", "CRITICAL",
              "The message states a critical condition."),
    CodeEntry(SysLogHandler.LOG_DEBUG, logging.DEBUG, "debug", "DEBUG",
              "The message is only for debugging purposes."),
    CodeEntry(SysLogHandler.LOG_EMERG, logging.FATAL, "emergency", "FATAL",
              "The message says the system is unusable."),
    CodeEntry(SysLogHandler.LOG_ERR, logging.ERROR, "error", "ERROR",
              "The message describes an error."),
    CodeEntry(SysLogHandler.LOG_INFO, logging.INFO, "info", "INFO",
              "The message is purely informational."),
    CodeEntry(SysLogHandler.LOG_NOTICE, logging.INFO, "notice", "INFO",
              "The message describes a normal but important event."),
    CodeEntry(SysLogHandler.LOG_WARNING, logging.WARNING, "warning", "WARNING",
              "The message is a warning."),
])
