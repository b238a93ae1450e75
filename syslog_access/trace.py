"""Access line formatter — one tab-separated summary per completed request.

Field order:
    host:port  peer[({forwarded}?)]  received,sent/elapsed  status
    {content-type}  host-header  {request-line}  {referrer}  {user-agent}

Syslog itself prepends the timestamp, ident and PID.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConnectionSummary:
    host: str
    port: int
    peer: str
    forwarded_for: str | None = None
    bytes_received: int = 0
    bytes_sent: int = 0
    elapsed: float = 0.0
    status: int = 0
    content_type: str | None = None
    host_header: str | None = None
    request_host: str | None = None
    request_line: str | None = None
    referrer: str | None = None
    user_agent: str | None = None


def format_elapsed(seconds: float) -> str:
    """Render seconds as ``<sec>.<microseconds>``, e.g. ``1.000250``."""
    micros = max(0, int(round(seconds * 1_000_000)))
    sec, usec = divmod(micros, 1_000_000)
    return f"{sec}.{usec:06d}"


def strip_query(request_line: str) -> str:
    """Drop the query string from the URI of a ``METHOD URI PROTOCOL`` line."""
    parts = request_line.split(" ")
    if len(parts) < 2:
        return request_line
    parts[1] = parts[1].partition("?")[0]
    return " ".join(parts)


def _braced(value: str | None) -> str:
    return "{" + (value or "") + "}"


def format_access_line(summary: ConnectionSummary) -> str:
    # The forwarded-for value comes from the client and may be forged.
    if summary.forwarded_for:
        peer = f"{summary.peer}({{{summary.forwarded_for}}}?)"
    else:
        peer = summary.peer

    fields = [
        f"{summary.host}:{summary.port}",
        peer,
        f"{summary.bytes_received},{summary.bytes_sent}/{format_elapsed(summary.elapsed)}",
        str(summary.status or 200),
        _braced(summary.content_type),
        summary.host_header or summary.request_host or summary.host,
        _braced(summary.request_line),
        _braced(summary.referrer),
        _braced(summary.user_agent),
    ]
    return "\t".join(fields)
