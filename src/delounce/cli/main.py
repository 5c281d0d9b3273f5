# src/delounce/cli/main.py

"""
CLI entrypoint.

    delounce wait-for [--interval-ms N] [--timeout-ms N] [--min-ms N] -- CMD [ARGS...]

Re-runs CMD every interval until it exits 0 or the timeout passes.
Exit codes: 0 success, 1 timed out, 2 usage error / CMD cannot be started.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
from collections.abc import Sequence

from ..config import Settings, get_settings
from ..core.errors import InvalidArgumentError, PollCancelled
from ..core.models import PollState
from ..logging_setup import setup_logging
from ..tasks.poller import polling
from ..tasks.timing import limit

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TIMEOUT = 1
EXIT_USAGE = 2


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=settings.app_name)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on the console")
    sub = parser.add_subparsers(dest="command", required=True)

    wait = sub.add_parser("wait-for", help="poll a command until it succeeds")
    wait.add_argument("--interval-ms", type=int, default=settings.poll_interval_ms)
    wait.add_argument("--timeout-ms", type=int, default=settings.wait_timeout_ms)
    wait.add_argument(
        "--min-ms",
        type=int,
        default=0,
        help="do not report success before this many ms have passed",
    )
    wait.add_argument("cmd", nargs=argparse.REMAINDER)
    return parser


async def _probe(cmd: Sequence[str]) -> bool:
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )
    rc = await proc.wait()
    logger.debug("%s exited with %s", cmd[0], rc)
    return rc == 0


async def wait_for(cmd: Sequence[str], *, interval_ms: int, timeout_ms: int, min_ms: int = 0) -> bool:
    """Poll `cmd` until it exits 0. Returns False if `timeout_ms` passed first."""
    handle = polling(interval_ms, _probe, list(cmd))
    try:
        await limit(min_ms, timeout_ms, handle.completion)
    finally:
        if not handle.state.terminal:
            handle.cancel()
            with contextlib.suppress(PollCancelled):
                await handle.completion

    if handle.state == PollState.RESOLVED:
        logger.info("%s succeeded after %s attempt(s)", cmd[0], handle.attempts)
        return True

    logger.warning("Gave up on %s after %sms (%s attempt(s))", cmd[0], timeout_ms, handle.attempts)
    return False


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    parser = _build_parser(settings)
    args = parser.parse_args(argv)

    console_level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    cmd = list(args.cmd)
    if cmd and cmd[0] == "--":
        cmd = cmd[1:]
    if not cmd:
        parser.error("wait-for needs a command to run")

    try:
        ok = asyncio.run(
            wait_for(
                cmd,
                interval_ms=args.interval_ms,
                timeout_ms=args.timeout_ms,
                min_ms=args.min_ms,
            )
        )
    except InvalidArgumentError as e:
        logger.error("%s", e)
        return EXIT_USAGE
    except OSError as e:
        logger.error("Cannot run %s: %s", cmd[0], e)
        return EXIT_USAGE
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return EXIT_TIMEOUT

    return EXIT_OK if ok else EXIT_TIMEOUT


if __name__ == "__main__":
    raise SystemExit(main())
