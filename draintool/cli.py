import argparse, logging, sys
from .logging_util import setup_logging
from .orchestrator import run
from . import __version__
from .errors import DrainToolError
from .events import parse_event
from .formatting import print_json_data
from .reporting import print_node_report

log = logging.getLogger(__name__)

def read_payload(value: str) -> str:
    """
    Resolve a PAYLOAD argument: '-' reads stdin, '@path' reads a file,
    anything else is taken as the JSON text itself.
    """
    if value == "-":
        return sys.stdin.read()
    if value.startswith("@"):
        with open(value[1:], encoding="utf-8") as f:
            return f.read()
    return value

def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        prog="draintool",
        description="Drain an ECS container instance for an Auto Scaling termination lifecycle hook",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    payload_help = "SNS event JSON, '@FILE' to read it from a file, or '-' for stdin"

    # Subcommand for one drain pass (what the Lambda does)
    parser_run = subparsers.add_parser("run", help="Run one drain pass for a lifecycle notification")
    parser_run.add_argument("payload", help=payload_help)
    parser_run.add_argument("--dry-run", "-n", action="store_true", help="Only read from AWS; show what would be done")
    parser_run.set_defaults(func=lambda args: run(read_payload(args.payload), dry_run=args.dry_run))

    # Subcommand for decoding only; no AWS calls
    parser_parse = subparsers.add_parser("parse", help="Decode a lifecycle notification and print it as JSON")
    parser_parse.add_argument("payload", help=payload_help)
    parser_parse.set_defaults(func=lambda args: print_json_data(parse_event(read_payload(args.payload)).to_dict()))

    # Subcommand for a read-only view of the node and its tasks
    parser_inspect = subparsers.add_parser("inspect", help="Show the container instance and how its tasks would be drained (no changes)")
    parser_inspect.add_argument("payload", help=payload_help)
    parser_inspect.add_argument("--json", nargs="?", const="-", metavar="FILE", help="Output JSON to stdout (no FILE) or write to FILE; skips table")
    parser_inspect.set_defaults(func=lambda args: print_node_report(parse_event(read_payload(args.payload)), output_json=args.json))

    args = parser.parse_args(argv)

    setup_logging()

    if not hasattr(args, "func"):
        parser.print_help()
        return
    try:
        args.func(args)
    except DrainToolError as exc:
        log.error("%s failed: %s", args.command, exc)
        sys.exit(1)

if __name__ == "__main__":
    main()
