"""Tests for command pipelines and outcomes."""

import pytest

from daybook.commands.pipeline import (
    CANCELLED,
    Outcome,
    OutcomeStatus,
    is_cancelled,
    run_pipeline,
)
from daybook.errors import CommandError, MissingTargetError


class TestCancelledSentinel:
    def test_is_falsy_singleton(self):
        assert not CANCELLED
        assert repr(CANCELLED) == "CANCELLED"
        assert type(CANCELLED)() is CANCELLED

    def test_is_cancelled(self):
        assert is_cancelled(CANCELLED)
        assert not is_cancelled(None)
        assert not is_cancelled("")


class TestRunPipeline:
    @pytest.mark.asyncio
    async def test_sync_and_async_stages(self):
        async def double(value):
            return value * 2

        outcome = await run_pipeline(1, lambda value: value + 1, double)

        assert outcome.is_ok
        assert outcome.value == 4
        assert outcome.error is None

    @pytest.mark.asyncio
    async def test_no_stages_returns_value(self):
        outcome = await run_pipeline("text")
        assert outcome == Outcome.ok("text")

    @pytest.mark.asyncio
    async def test_cancelled_stage_stops_the_chain(self):
        calls = []

        def dismiss(value):
            calls.append("dismiss")
            return CANCELLED

        def never(value):
            calls.append("never")
            return value

        outcome = await run_pipeline("prompt", dismiss, never)

        assert outcome.is_cancelled
        assert outcome.status is OutcomeStatus.CANCELLED
        assert outcome.error is None
        assert calls == ["dismiss"]

    @pytest.mark.asyncio
    async def test_cancelled_initial_value(self):
        outcome = await run_pipeline(CANCELLED, pytest.fail)
        assert outcome.is_cancelled

    @pytest.mark.asyncio
    async def test_daybook_error_is_kept(self):
        error = MissingTargetError()

        def fail(value):
            raise error

        outcome = await run_pipeline(None, fail)

        assert outcome.is_failed
        assert outcome.error is error

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self):
        async def load_entry(value):
            raise OSError("disk full")

        outcome = await run_pipeline(None, load_entry, name="process_input")

        assert outcome.is_failed
        assert isinstance(outcome.error, CommandError)
        assert outcome.error.details == {"stage": "load_entry"}
        assert "disk full" in outcome.error.message
