"""Command-line entry points for the broker, producer and consumer processes."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, Sequence

from .config import ArataMQConfig
from .logger import Logger


def _parse(prog: str, argv: Optional[Sequence[str]]) -> ArataMQConfig:
    parser = argparse.ArgumentParser(prog=prog)
    parser.add_argument(
        "--root-dir",
        help="directory holding the 'files' directory for logs and queues",
    )
    args = parser.parse_args(argv)
    if args.root_dir:
        return ArataMQConfig(root_dir=args.root_dir)
    return ArataMQConfig()


def _wait_for_quit(stream: Iterable[str]) -> None:
    """Consume input until a 'q' or 'Q' character or end of input."""
    for line in stream:
        if "q" in line or "Q" in line:
            return


def _report_error(exc: Exception) -> None:
    try:
        Logger.instance().error("Error {}", str(exc))
    except RuntimeError:
        print(f"Error {exc}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the broker until 'q' is read from standard input."""
    config = _parse("aratamq", argv)
    try:
        Logger.initialize("ArataMQ", config.log_file_dir, config.log_file, True)
        Logger.instance().info("Starting ArataMQ")
        _wait_for_quit(sys.stdin)
        Logger.instance().info("Shutting down ArataMQ")
        return 0
    except Exception as exc:
        _report_error(exc)
        return 1
    finally:
        Logger.cleanup()


def _client(name: str, prog: str, argv: Optional[Sequence[str]]) -> int:
    config = _parse(prog, argv)
    try:
        Logger.initialize(name, config.log_file_dir, config.log_file, False)
        Logger.instance().info("Connected {}", name.replace("_", " "))
        Logger.instance().info("Shutting down {}", name.replace("_", " "))
        return 0
    except Exception as exc:
        _report_error(exc)
        return 1
    finally:
        Logger.cleanup()


def producer_main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect as a producer, log the session and exit."""
    return _client("ArataMQ_Producer", "aratamq-producer", argv)


def consumer_main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect as a consumer, log the session and exit."""
    return _client("ArataMQ_Consumer", "aratamq-consumer", argv)


if __name__ == "__main__":
    sys.exit(main())