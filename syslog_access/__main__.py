from syslog_access.cli import main

main()
