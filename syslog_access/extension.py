"""Flask integration — sends one syslog access line per completed request."""

import atexit
import logging
import threading
import time
from dataclasses import replace

from flask import Flask, Request, Response, g, request

from syslog_access.codes import PRIORITIES, lookup_by_host_code
from syslog_access.config import DEFAULT_PRIORITY, Config, Settings, resolve
from syslog_access.sink import SysLogSink
from syslog_access.trace import ConnectionSummary, format_access_line, strip_query

logger = logging.getLogger(__name__)

EXTENSION_KEY = "syslog_access"

# One syslog handle per process, opened by the first app initialized.
_sink = SysLogSink()
_init_lock = threading.Lock()
_initialized = False


def _open_shared_sink(settings: Settings) -> SysLogSink:
    global _initialized
    with _init_lock:
        if not _initialized:
            _sink.open(settings.ident, settings.access_log_facility, settings.log_mask)
            atexit.register(_sink.close)
            _initialized = True
        else:
            logger.debug("Syslog already initialized, reusing sink for %s", settings.ident)
    return _sink


def _request_line(req: Request) -> str:
    query = req.query_string.decode("latin-1")
    uri = req.script_root + req.path + ("?" + query if query else "")
    return f"{req.method} {uri} {req.environ.get('SERVER_PROTOCOL', 'HTTP/1.0')}"


def _bytes_sent(response: Response) -> int:
    if response.content_length is not None:
        return response.content_length
    if response.is_streamed:
        # Counted by CountingBody while the body is sent.
        return 0
    return response.calculate_content_length() or 0


class CountingBody:
    """Response iterable that counts the encoded bytes handed to the server."""

    def __init__(self, response: Response):
        self._source = response.response
        self._chunks = response.iter_encoded()
        self.bytes_sent = 0

    def __iter__(self):
        for chunk in self._chunks:
            self.bytes_sent += len(chunk)
            yield chunk

    def close(self):
        close = getattr(self._source, "close", None)
        if close is not None:
            close()


def summary_from_request(req: Request, response: Response, started: float | None,
                         suppress_query: bool = False) -> ConnectionSummary:
    """Collect the access line fields from a Flask request/response pair."""
    environ = req.environ
    request_line = _request_line(req)
    if suppress_query:
        request_line = strip_query(request_line)

    return ConnectionSummary(
        host=environ.get("SERVER_NAME", ""),
        port=int(environ.get("SERVER_PORT") or 0),
        peer=req.remote_addr or "",
        forwarded_for=req.headers.get("X-Forwarded-For"),
        bytes_received=req.content_length or 0,
        bytes_sent=_bytes_sent(response),
        elapsed=time.monotonic() - started if started is not None else 0.0,
        status=response.status_code,
        content_type=response.content_type,
        host_header=req.headers.get("Host"),
        request_host=req.host,
        request_line=request_line,
        referrer=req.referrer,
        user_agent=req.headers.get("User-Agent"),
    )


class SysLogErrorHandler(logging.Handler):
    """Forwards log records to syslog, priority picked from the record level."""

    def __init__(self, sink: SysLogSink, facility: int, level=logging.NOTSET):
        super().__init__(level)
        self._sink = sink
        self.facility = facility

    def emit(self, record):
        try:
            msg = self.format(record)
            priority = lookup_by_host_code(PRIORITIES, record.levelno, DEFAULT_PRIORITY)
            self._sink.log(self.facility, priority, msg)
        except Exception:
            self.handleError(record)


class SysLogTrace:
    def __init__(self, app: Flask | None = None):
        self.settings = None
        self.sink = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask):
        if EXTENSION_KEY in app.extensions:
            logger.debug("Syslog tracing already installed on %s", app.name)
            existing = app.extensions[EXTENSION_KEY]
            self.settings = existing.settings
            self.sink = existing.sink
            return
        config = Config.from_mapping(app.config.get("SYSLOG"))
        settings = resolve(config, default_ident=app.name)
        sink = _open_shared_sink(settings)

        app.before_request(self._mark_start)
        app.after_request(self._make_trace(settings, sink))

        if settings.forward_errors and not any(
            isinstance(h, SysLogErrorHandler) for h in app.logger.handlers
        ):
            app.logger.addHandler(SysLogErrorHandler(sink, settings.error_log_facility))
            logger.info("Forwarding %s error log to syslog facility %d",
                        app.name, settings.error_log_facility)

        self.settings = settings
        self.sink = sink
        app.extensions[EXTENSION_KEY] = self

    @staticmethod
    def _mark_start():
        g._syslog_started = time.monotonic()

    @staticmethod
    def _make_trace(settings: Settings, sink: SysLogSink):
        def write(summary: ConnectionSummary):
            sink.log(settings.access_log_facility, settings.priority,
                     format_access_line(summary))

        def trace(response: Response) -> Response:
            started = g.get("_syslog_started")
            try:
                summary = summary_from_request(
                    request, response, started,
                    suppress_query=settings.suppress_query,
                )
                if response.content_length is None and response.is_streamed:
                    # The body is sent after this hook returns; log once it is closed.
                    body = CountingBody(response)
                    response.response = body
                    response.call_on_close(
                        lambda: _write_streamed(write, summary, body, started)
                    )
                else:
                    write(summary)
            except Exception:
                logger.exception("Failed to write access line for %s", request.path)
            return response

        return trace


def _write_streamed(write, summary: ConnectionSummary, body: CountingBody,
                    started: float | None):
    try:
        write(replace(
            summary,
            bytes_sent=body.bytes_sent,
            elapsed=time.monotonic() - started if started is not None else summary.elapsed,
        ))
    except Exception:
        logger.exception("Failed to write access line for streamed response")
