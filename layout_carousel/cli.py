#!/usr/bin/env python3
"""
Layout carousel CLI entry point
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
import traceback
from pathlib import Path

import shtab

from layout_carousel.__version__ import __version__
from layout_carousel.config import load_config
from layout_carousel.core.store import StateStore
from layout_carousel.dispatcher import CommandDispatcher
from layout_carousel.errors import CarouselError
from layout_carousel.log import TRACE, console_level, logger_level
from layout_carousel.platform.niri_socket import NiriSocket

LOG_FORMAT = '[%(asctime)s] %(levelname)-8s %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_logging(debug: bool = False, log_file: str | None = None, trace: bool = False) -> logging.Logger:
    """Setup logging to stderr and, optionally, a rotating file

    Args:
        debug: Enable debug level logging on stderr
        log_file: Path to log file (no file logging when None)
        trace: Also show raw niri traffic and timing steps (TRACE level)

    Calling it again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger('layout_carousel')
    logger.setLevel(logger_level(debug, trace, log_file))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10*1024*1024,  # 10 MB
                backupCount=5
            )
            file_handler.setLevel(TRACE if trace else logging.DEBUG)
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console handler (only warnings and errors unless debugging)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level(debug, trace))
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lc-niri',
        description='The layout carousel for niri WM. Switches layouts in comfort way like MacOS.',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )
    parser.add_argument(
        '--trace',
        action='store_true',
        help='Like --debug, plus raw niri IPC traffic and every timing step'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file'
    )
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help='Path to log file (default: no file logging)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )

    sub = parser.add_subparsers(dest='command', metavar='COMMAND')
    sub.add_parser(
        'switch',
        help='Switches to last used in single call, but uses next in double or more calls',
    )
    duration = sub.add_parser(
        'keypress-duration',
        help='The maximum duration between two calls to pick the next after last used layout',
    )
    duration.add_argument(
        'duration',
        type=float,
        nargs='?',
        default=None,
        help='New duration in seconds, in range [0.2; 1.0). Prints the current one when omitted',
    )
    sub.add_parser(
        'reload',
        help='Resetting all settings to default according to niri config file',
    )
    completion = sub.add_parser(
        'completion',
        help='Prints the completion code for a specific shell',
    )
    completion.add_argument(
        'shell',
        nargs='?',
        default=None,
        choices=shtab.SUPPORTED_SHELLS,
        help='Shell to generate completion for: bash, zsh or tcsh (default: bash)',
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the layout carousel"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    log = setup_logging(debug=args.debug, log_file=args.logfile, trace=args.trace)
    config = load_config(args.config, debug=args.debug or args.trace)

    debug = args.debug or config['debug']
    log_file = args.logfile or config['log_file']
    if debug != args.debug or log_file != args.logfile:
        log = setup_logging(debug=debug, log_file=log_file, trace=args.trace)

    log.debug("lc-niri %s: %s", __version__, args.command)

    dispatcher = CommandDispatcher(
        ipc_factory=lambda: NiriSocket.connect(config['socket_path'], timeout=config['ipc_timeout']),
        store=StateStore(lock_timeout=config['lock_timeout']),
    )

    try:
        if args.command == 'switch':
            dispatcher.switch()
        elif args.command == 'keypress-duration':
            dispatcher.keypress_duration(args.duration)
        elif args.command == 'reload':
            dispatcher.reload()
        elif args.command == 'completion':
            dispatcher.completion(parser, args.shell)
        return 0

    except CarouselError as e:
        log.error("%s", e)
        log.debug(traceback.format_exc())
        return 1

    except OSError as e:
        log.error("OS error: %s", e)
        log.debug(traceback.format_exc())
        return 1

    except Exception as e:
        log.error("Unhandled error: %s", e)
        log.debug(traceback.format_exc())
        return 1


if __name__ == '__main__':
    sys.exit(main())
