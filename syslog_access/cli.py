"""Command line interface — inspect syslog code tables or run the demo Flask server."""

import json
import logging
import sys
from argparse import ArgumentParser

from syslog_access.codes import FACILITIES, PRIORITIES, CodeTable
from syslog_access.config import Config, load_yaml_config, resolve

TABLES = {"facilities": FACILITIES, "priorities": PRIORITIES}


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="syslog-access",
        description="Syslog access logging for Flask applications.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    codes = sub.add_parser("codes", help="List known facility/priority names")
    codes.add_argument(
        "table",
        nargs="?",
        choices=sorted(TABLES),
        help="Table to list (default: both)",
    )
    codes.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    res = sub.add_parser("resolve", help="Resolve configured names to syslog codes")
    res.add_argument("--config", default=None, help="YAML config file with a syslog section")
    res.add_argument("--facility", help="Access log facility name (e.g. daemon, local4)")
    res.add_argument("--error-facility", help="Error log facility name")
    res.add_argument("--priority", help="Priority name (e.g. info, notice)")

    serve = sub.add_parser("serve", help="Run the demo Flask app with syslog tracing")
    serve.add_argument("--config", default=None, help="YAML config file with a syslog section")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    return parser


def format_table_text(table: CodeTable) -> str:
    return "\n".join(
        f"{e.id:<16}{e.code:>4}  {e.host_id or '-':<10}{e.info}" for e in table
    )


def table_rows(table: CodeTable) -> list[dict]:
    return [
        {"id": e.id, "code": e.code, "host_id": e.host_id, "info": e.info}
        for e in table
    ]


def run_codes(args):
    names = [args.table] if args.table else sorted(TABLES)
    for name in names:
        table = TABLES[name]
        if args.output == "json":
            print(json.dumps({name: table_rows(table)}))
        else:
            print(f"# {name}")
            print(format_table_text(table))


def run_resolve(args):
    section = load_yaml_config(args.config)
    overrides = {
        "access_log_facility": args.facility,
        "error_log_facility": args.error_facility,
        "priority": args.priority,
    }
    section.update({k: v for k, v in overrides.items() if v is not None})
    settings = resolve(Config.from_mapping(section), default_ident="syslog-access")
    print(json.dumps({
        "ident": settings.ident,
        "access_log_facility": settings.access_log_facility,
        "error_log_facility": settings.error_log_facility,
        "priority": settings.priority,
        "log_mask": settings.log_mask,
    }))


def run_serve(args):
    from syslog_access.app import create_app

    app = create_app(load_yaml_config(args.config))
    app.run(host=args.host, port=args.port, use_reloader=False)


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args(argv)
    try:
        if args.command == "codes":
            run_codes(args)
        elif args.command == "resolve":
            run_resolve(args)
        else:
            run_serve(args)
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
