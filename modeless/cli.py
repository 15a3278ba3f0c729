#!/usr/bin/env python3
"""
modeless CLI: convert the word before the cursor of a piece of text.

    modeless "hello world konna"           → hello world こんな
    modeless --next 1 "kanji"              → 感じ
    modeless --cancel "kanji"              → kanji
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
import traceback
from pathlib import Path

from modeless.__version__ import __version__

# Global logger instance
logger: logging.Logger | None = None


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Setup logging to both stderr and a rotating file.

    Args:
        debug: Enable debug level logging
        log_file: Path to log file (default: ~/.modeless.log)
    """
    global logger

    if logger is not None:
        return logger

    logger = logging.getLogger('modeless')
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if log_file is None:
        log_file = os.path.expanduser('~/.modeless.log')

    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8',
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console: warnings and up, everything in debug mode
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='modeless',
        description='Convert the romaji word before the cursor into Japanese',
    )
    parser.add_argument('text', help='Document text')
    parser.add_argument(
        '--cursor',
        type=int,
        default=None,
        help='Cursor offset (default: end of text)'
    )
    parser.add_argument(
        '--next',
        type=int,
        default=0,
        metavar='N',
        help='Press the convert key N more times to move through candidates'
    )
    parser.add_argument(
        '--cancel',
        action='store_true',
        help='Cancel instead of committing (prints the original text)'
    )
    parser.add_argument(
        '--candidates',
        action='store_true',
        help='Print the candidate list to stderr'
    )
    parser.add_argument('--config', type=str, default=None, help='Path to config file')
    parser.add_argument('--dictionary', type=str, default=None, help='Path to a JSON dictionary')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help='Path to log file (default: ~/.modeless.log)'
    )
    parser.add_argument('--version', action='version', version='%(prog)s ' + __version__)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the modeless CLI"""
    args = build_parser().parse_args(argv)
    log = setup_logging(debug=args.debug, log_file=args.logfile)
    log.debug("modeless %s, argv=%r", __version__, argv if argv is not None else sys.argv[1:])

    # Import after args parsing to avoid import-time side effects
    from modeless.app import ModelessApp
    from modeless.config import ConfigManager
    from modeless.input.key_bindings import KeyBinding, KeyEvent
    from modeless.platform.document_adapter import BufferDocument

    try:
        config = ConfigManager(config_path=args.config, debug=args.debug)
        if args.dictionary:
            config.set('dictionary_path', args.dictionary)
        if args.debug:
            config.set('debug', True)

        document = BufferDocument(args.text, cursor=args.cursor)
        app = ModelessApp(config=config, debug=args.debug)
        controller = app.attach(document)

        if not controller.trigger():
            for msg in document.messages:
                print(msg, file=sys.stderr)
            print(document.text)
            return 1

        for _ in range(args.next):
            controller.trigger()

        engine = controller.engine
        if args.candidates and hasattr(engine, 'candidates'):
            print(' '.join(engine.candidates), file=sys.stderr)

        if args.cancel:
            controller.cancel()
        else:
            commit = KeyBinding.parse(config.get('commit_keys')[0])
            document.press(KeyEvent(code=commit.code, modifiers=commit.modifiers))

        app.shutdown()
        print(document.text)
        return 0

    except ValueError as e:
        log.error(f"Invalid input: {e}")
        log.debug(traceback.format_exc())
        return 1

    except Exception as e:
        log.error(f"Unhandled error: {type(e).__name__}: {e}")
        log.debug(traceback.format_exc())
        return 1


if __name__ == '__main__':
    sys.exit(main())
