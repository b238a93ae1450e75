"""Entry point for syslog-access when run from a checkout."""

from syslog_access.cli import main

if __name__ == "__main__":
    main()
