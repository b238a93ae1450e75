"""Process-wide handle on the system logger (POSIX syslog)."""

import logging
import syslog
import threading

logger = logging.getLogger(__name__)

_LOG_OPTIONS = syslog.LOG_PID | getattr(syslog, "LOG_NOWAIT", 0)


def encode_priority(facility: int, priority: int) -> int:
    """Combine an unshifted facility code and a severity into a syslog priority."""
    return (facility << 3) | priority


class SysLogSink:
    """Opened once with an ident and default facility, closed once at shutdown."""

    def __init__(self):
        self._lock = threading.Lock()
        self._open = False
        self.ident = None
        self.facility = None

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._open

    def open(self, ident: str, facility: int, log_mask: int | None = None):
        with self._lock:
            if self._open:
                logger.debug("Syslog sink already open as %s, ignoring reopen", self.ident)
                return
            syslog.openlog(ident, _LOG_OPTIONS, facility << 3)
            if log_mask is not None:
                syslog.setlogmask(syslog.LOG_UPTO(log_mask))
            self.ident = ident
            self.facility = facility
            self._open = True
        logger.info("Opened syslog as %s (facility=%d, mask=%s)", ident, facility, log_mask)

    def log(self, facility: int, priority: int, line: str):
        with self._lock:
            if not self._open:
                logger.debug("Syslog sink closed, dropping: %s", line)
                return
            syslog.syslog(encode_priority(facility, priority), line)

    def close(self):
        with self._lock:
            if not self._open:
                return
            syslog.closelog()
            self._open = False
        logger.info("Closed syslog for %s", self.ident)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
