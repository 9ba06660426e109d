from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scripts.sync_sport import main, parse_args, run


class _SessionContext:
    async def __aenter__(self):
        return MagicMock()

    async def __aexit__(self, *exc):
        return False


def test_parse_args_defaults():
    args = parse_args(["football"])

    assert args.sport == "football"
    assert args.season is None
    assert args.verbose is False


def test_parse_args_rejects_unknown_sport():
    with pytest.raises(SystemExit):
        parse_args(["cricket"])


@pytest.mark.asyncio
async def test_run_returns_zero_on_success():
    orchestrator = MagicMock()
    orchestrator.sync = AsyncMock(return_value={"season": "2026", "events": 24})

    with patch("scripts.sync_sport.AsyncSessionLocal", return_value=_SessionContext()), \
            patch("scripts.sync_sport.SyncOrchestrator", return_value=orchestrator):
        code = await run(parse_args(["f1", "--season", "2026"]))

    assert code == 0
    orchestrator.sync.assert_awaited_once_with("f1", "2026")


@pytest.mark.asyncio
async def test_run_returns_one_on_failure():
    orchestrator = MagicMock()
    orchestrator.sync = AsyncMock(side_effect=RuntimeError("TheSportsDB request failed (500)"))

    with patch("scripts.sync_sport.AsyncSessionLocal", return_value=_SessionContext()), \
            patch("scripts.sync_sport.SyncOrchestrator", return_value=orchestrator):
        code = await run(parse_args(["basketball"]))

    assert code == 1


def test_main_exits_with_run_status():
    with patch("scripts.sync_sport.run", new=AsyncMock(return_value=1)):
        with pytest.raises(SystemExit) as exc_info:
            main(["football", "--verbose"])

    assert exc_info.value.code == 1
