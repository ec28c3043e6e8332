"""
CLI parser setup.
"""

import argparse

from .catalog import cmd_list, cmd_describe, cmd_check_contracts
from .run import cmd_run


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-library",
        description="Product-management process catalog and runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s describe product-management/jtbd-analysis
  %(prog)s run product-management/jtbd-analysis --set productName=Acme --set minimumJobCount=1 --auto-approve
  %(prog)s run product-management/customer-advisory-board --inputs cab.yaml --output result.json
  %(prog)s check-contracts
        """
    )

    parser.add_argument("--workspace", "-w", help="Workspace path (default: current directory)")
    parser.add_argument("--log-level", help="Log level: debug, info, warn, error (default: from config)")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # list
    list_parser = subparsers.add_parser("list", help="List registered processes")
    list_parser.set_defaults(func=cmd_list)

    # describe
    describe_parser = subparsers.add_parser("describe", help="Show a process catalog entry")
    describe_parser.add_argument("process_id", help="Process ID")
    describe_parser.add_argument("--json", action="store_true", help="Print the entry as JSON")
    describe_parser.set_defaults(func=cmd_describe)

    # run
    run_parser = subparsers.add_parser("run", help="Run a process")
    run_parser.add_argument("process_id", help="Process ID")
    run_parser.add_argument("--inputs", "-i", help="Inputs file (YAML or JSON)")
    run_parser.add_argument("--set", "-s", action="append", default=[], metavar="KEY=VALUE",
                            help="Override one input; VALUE is parsed as YAML (repeatable)")
    run_parser.add_argument("--executor", "-e", choices=["placeholder", "llm"],
                            help="Task executor (default: from config)")
    run_parser.add_argument("--auto-approve", action="store_true", help="Approve every breakpoint")
    run_parser.add_argument("--runs-dir", help="Directory for run records")
    run_parser.add_argument("--output", "-o", help="Write the result as JSON to this file")
    run_parser.set_defaults(func=cmd_run)

    # check-contracts
    check_parser = subparsers.add_parser("check-contracts", help="Check every task output contract")
    check_parser.set_defaults(func=cmd_check_contracts)

    return parser
