import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from printreset import __version__
from printreset.config import CleanupContext, ResetOptions, load_settings
from printreset.errors import ConfigError, PrintResetError
from printreset.logging_setup import setup_logging
from printreset.orchestrator import CleanupOrchestrator
from printreset.privilege import is_admin
from printreset.ui import confirm, console, summary_panel

logger = logging.getLogger("printreset.cli")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="printer-reset",
        description=(
            "Reset printer state: clear user printer preferences, purge the spool "
            "queue and remove unused printer drivers and ports."
        ),
    )
    parser.add_argument(
        "-RemoveAllPrinters",
        "--remove-all-printers",
        dest="remove_all_printers",
        action="store_true",
        help="Remove every installed printer before cleaning drivers and ports",
    )
    parser.add_argument(
        "-Force",
        "--force",
        dest="force",
        action="store_true",
        help="Do not ask for confirmation before removing printers",
    )
    parser.add_argument(
        "-UserLevelOnly",
        "--user-level-only",
        dest="user_level_only",
        action="store_true",
        help="Only clean per-user state, even when running as administrator",
    )
    parser.add_argument("--config", metavar="PATH", help="YAML settings file")
    parser.add_argument("--backup-dir", metavar="PATH", help="Directory for registry backups")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _confirm_removal(message: str) -> bool:
    return confirm(
        message,
        details=[
            "Print queues and their pending jobs are deleted",
            "Drivers and ports left unused are removed afterwards",
        ],
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        console.error(f"Configuration error: {e}")
        return EXIT_FATAL
    if args.backup_dir:
        settings = replace(settings, backup_dir=args.backup_dir)

    options = ResetOptions(
        remove_all_printers=args.remove_all_printers,
        force=args.force,
        user_level_only=args.user_level_only,
    )
    context = CleanupContext.build(options, settings, is_admin=is_admin())
    orchestrator = CleanupOrchestrator(context, confirm=_confirm_removal)

    try:
        summary = orchestrator.run()
    except KeyboardInterrupt:
        console.print()
        logger.error("Interrupted")
        return EXIT_INTERRUPTED
    except PrintResetError as e:
        logger.error(f"Fatal: {e}")
        return EXIT_FATAL
    except Exception as e:
        # Safety net so the operator always gets a log line and exit status
        logger.error(f"Unexpected error: {e}", exc_info=args.verbose)
        return EXIT_FATAL

    summary_panel(summary)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
