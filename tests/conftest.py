import pytest

from syslog_access import extension, sink

SYSLOG_ENV = (
    "SYSLOG_IDENT", "SYSLOG_ACCESS_FACILITY", "SYSLOG_ERROR_FACILITY",
    "SYSLOG_PRIORITY", "SYSLOG_LOG_MASK", "SYSLOG_SUPPRESS_QUERY",
    "SYSLOG_FORWARD_ERRORS",
)


class SyslogRecorder:
    """Stands in for the syslog module's functions and records each call."""

    def __init__(self):
        self.calls = []

    def openlog(self, ident, logoption, facility):
        self.calls.append(("openlog", ident, logoption, facility))

    def syslog(self, priority, message):
        self.calls.append(("syslog", priority, message))

    def closelog(self):
        self.calls.append(("closelog",))

    def setlogmask(self, mask):
        self.calls.append(("setlogmask", mask))
        return 0

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

    @property
    def messages(self):
        return [(c[1], c[2]) for c in self.named("syslog")]


@pytest.fixture(autouse=True)
def _clean_syslog_env(monkeypatch):
    for name in SYSLOG_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def syslog_recorder(monkeypatch):
    recorder = SyslogRecorder()
    for name in ("openlog", "syslog", "closelog", "setlogmask"):
        monkeypatch.setattr(sink.syslog, name, getattr(recorder, name))
    return recorder


@pytest.fixture
def fresh_extension(monkeypatch, syslog_recorder):
    """Reset the process-wide sink so each test initializes it again.

    Returns the list of callbacks that would have been registered with atexit.
    """
    monkeypatch.setattr(extension, "_sink", sink.SysLogSink())
    monkeypatch.setattr(extension, "_initialized", False)
    registered = []
    monkeypatch.setattr(extension.atexit, "register", registered.append)
    return registered
