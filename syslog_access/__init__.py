"""Syslog access logging for Flask applications."""

from syslog_access.codes import FACILITIES, PRIORITIES, CodeEntry, CodeTable, lookup
from syslog_access.extension import SysLogTrace

__all__ = ["FACILITIES", "PRIORITIES", "CodeEntry", "CodeTable", "lookup", "SysLogTrace"]
