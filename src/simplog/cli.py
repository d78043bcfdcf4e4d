"""Command-line front end for simplog.

Writes a record from a shell script using the same settings, file layout
and colors as the library:

    simplog Backup finished
    simplog warn Disk almost full
    simplog -f deploy.log -d 3 verbose "step 3 of 5"
    simplog -c simplog.conf --flush
    simplog --stack-trace

Options are applied after the config file, in the same order load_config()
uses: logfile, flush, silent, wrap, color, debug.
"""

import argparse
import sys

from ._version import VERSION, __app_name__
from .levels import INFO, parse_level
from .manager import LogManager


def _split_level(words):
    """Return (level, message words).

    The first word is taken as the level only when it names one;
    otherwise the whole line is an INFO message.
    """
    if words:
        try:
            return parse_level(words[0]), words[1:]
        except ValueError:
            pass
    return INFO, words


def _build_parser():
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="simplog — write timestamped, leveled log records",
        epilog=(
            "Levels: fatal (-2), error (-1), info (0), warn (1), debug (2),\n"
            "verbose (3). Config file keys: logfile, flush, silent, wrap,\n"
            "color, debug."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"{__app_name__} {VERSION}",
    )
    parser.add_argument("-c", "--config", metavar="PATH",
                        help="Load settings from a key=value config file")
    parser.add_argument("-f", "--file", metavar="PATH", dest="logfile",
                        help="Log file to append to (default: default.log)")
    parser.add_argument("-d", "--debug", metavar="LEVEL", type=int,
                        help="Verbosity threshold, 0 (info) to 3 (verbose)")
    parser.add_argument("-s", "--silent", action="store_true", default=None,
                        help="Write to the log file only, not the console")
    parser.add_argument("-w", "--wrap", action="store_true", default=None,
                        help="Wrap records at 80 columns")
    parser.add_argument("--no-color", dest="color", action="store_false",
                        default=None, help="Disable colored console output")
    parser.add_argument("--flush", action="store_true", default=False,
                        help="Empty the log file before writing")
    parser.add_argument("--stack-trace", action="store_true", default=False,
                        help="Append the current stack trace")
    parser.add_argument("words", nargs="*", metavar="[LEVEL] MESSAGE",
                        help="Optional record level (name or number, "
                             "default: info) followed by the message text; "
                             "words are joined with spaces")
    return parser


def main(argv=None):
    """Main entry point for the simplog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 1 = a sink write failed).
    """
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    level, message = _split_level(args.words)
    if args.words and not message:
        parser.error("a message is required after the level")

    log = LogManager()
    if args.config:
        log.load_config(args.config)

    overrides = {
        "logfile": args.logfile,
        "flush": args.flush or None,
        "silent": args.silent,
        "wrap": args.wrap,
        "color": args.color,
        "debug": args.debug,
    }
    log.apply_config({k: v for k, v in overrides.items() if v is not None})

    ok = True
    if message:
        ok = log.write_log(level, " ".join(message))

    if args.stack_trace:
        ok = log.write_stack_trace() and ok

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
