"""Entry point for TaskPane.

This module allows running TaskPane as a module:
    python -m taskpane

Or as an installed command:
    taskpane
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from taskpane.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskpane", description="Terminal to-do lists.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.ini")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--dev", action="store_true", help="Log to the Textual dev console")
    return parser


def main(args: Optional[list[str]] = None) -> int:
    """Main entry point for TaskPane.

    Args:
        args: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    options = build_parser().parse_args(sys.argv[1:] if args is None else args)

    # Logging must be ready before the app modules log anything
    setup_logging(log_level=options.log_level, use_textual_handler=options.dev)

    from taskpane.config import Config
    from taskpane.ui.app import TaskPaneApp

    try:
        app = TaskPaneApp(config=Config(options.config))
        app.run()
        logger.info("TaskPane application exited normally")
        return 0
    except KeyboardInterrupt:
        logger.info("TaskPane closed by user (Ctrl+C)")
        return 0
    except Exception:
        logger.error("Error running TaskPane", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
