"""
todoist-tasks command line

Usage:
    # List registered task types
    todoist-tasks types

    # Run a flow file; secrets come from --secret or the environment
    todoist-tasks run flows/daily-review.yaml --var project=2203306141 \
        --secret TODOIST_API_TOKEN=0123abcd

Environment:
    TODOIST_STORAGE_DIR   - Internal storage root for STORE outputs
    TODOIST_API_BASE_URL  - Override the Todoist API base URL
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Dict, List, Optional

from .constants import STORAGE_DIR_ENV
from .context import RunContext
from .errors import TodoistPluginError
from .loader import FlowLoader
from .registry import TASK_REGISTRY, list_task_types
from .runner import FlowRunner
from .storage import LocalInternalStorage

logger = logging.getLogger(__name__)


def _parse_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    result = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"{option} expects KEY=VALUE, got '{pair}'")
        result[key] = value
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoist-tasks",
        description="Run Todoist workflow tasks from YAML flow files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a flow file")
    run_parser.add_argument("flow", help="Path to the flow YAML file")
    run_parser.add_argument("--var", action="append", metavar="KEY=VALUE", help="Flow variable")
    run_parser.add_argument("--secret", action="append", metavar="KEY=VALUE", help="Secret value")
    run_parser.add_argument(
        "--storage-dir",
        default=os.environ.get(STORAGE_DIR_ENV),
        help=f"Internal storage root (default: ${STORAGE_DIR_ENV} or a temp dir)",
    )

    subparsers.add_parser("types", help="List registered task types")
    return parser


async def _run(args: argparse.Namespace) -> int:
    flow = FlowLoader().load_from_file(args.flow)

    storage = LocalInternalStorage(args.storage_dir) if args.storage_dir else None
    context = RunContext(
        variables={"vars": _parse_pairs(args.var, "--var")},
        secrets=_parse_pairs(args.secret, "--secret"),
        storage=storage,
    )

    outputs = await FlowRunner(context).run(flow)
    print(json.dumps(outputs, indent=2, default=str))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "types":
        for task_type in list_task_types():
            print(f"{task_type:28} {TASK_REGISTRY[task_type].description}")
        return 0

    try:
        return asyncio.run(_run(args))
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except TodoistPluginError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
