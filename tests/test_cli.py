# tests/test_cli.py

from __future__ import annotations

import sys

import pytest

from delounce.cli import main as cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch) -> None:
    # Leave pytest's own logging handlers alone.
    monkeypatch.setattr(cli, "setup_logging", lambda **_: None)


def test_wait_for_succeeds_when_command_exits_zero() -> None:
    rc = cli.main(
        ["wait-for", "--interval-ms", "10", "--timeout-ms", "5000", "--", sys.executable, "-c", "pass"]
    )
    assert rc == cli.EXIT_OK


def test_wait_for_times_out() -> None:
    rc = cli.main(
        [
            "wait-for",
            "--interval-ms",
            "10",
            "--timeout-ms",
            "150",
            "--",
            sys.executable,
            "-c",
            "raise SystemExit(1)",
        ]
    )
    assert rc == cli.EXIT_TIMEOUT


def test_wait_for_rejects_min_above_timeout() -> None:
    rc = cli.main(
        ["wait-for", "--min-ms", "500", "--timeout-ms", "100", "--", sys.executable, "-c", "pass"]
    )
    assert rc == cli.EXIT_USAGE


def test_wait_for_reports_missing_executable() -> None:
    rc = cli.main(["wait-for", "--interval-ms", "5", "--", "/nonexistent/delounce-probe"])
    assert rc == cli.EXIT_USAGE


def test_wait_for_requires_a_command() -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["wait-for"])
    assert exc.value.code == 2


@pytest.mark.asyncio
async def test_wait_for_respects_min_ms() -> None:
    import asyncio

    loop = asyncio.get_running_loop()
    started = loop.time()
    ok = await cli.wait_for([sys.executable, "-c", "pass"], interval_ms=5, timeout_ms=5000, min_ms=300)

    assert ok
    assert loop.time() - started >= 0.3 - 0.01
