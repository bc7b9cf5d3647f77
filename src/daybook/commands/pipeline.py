"""Sequential command pipelines with explicit outcomes.

A command is a chain of stages (prompt, parse, load, inject, show). Each
stage receives the previous stage's value and may be sync or async. The chain
stops at the first stage that returns ``CANCELLED`` or raises, and the whole
run is summarized as an ``Outcome``: ok, failed, or cancelled. Cancellation
is a terminal outcome, never an error.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from daybook.errors import CommandError, DaybookError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Cancelled:
    """Sentinel type for "the user dismissed the prompt"."""

    _instance: Optional["_Cancelled"] = None

    def __new__(cls) -> "_Cancelled":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCELLED"

    def __bool__(self) -> bool:
        return False


CANCELLED = _Cancelled()


class OutcomeStatus(Enum):
    OK = "ok"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Terminal state of a command."""

    status: OutcomeStatus
    value: Optional[T] = None
    error: Optional[DaybookError] = None

    @classmethod
    def ok(cls, value: T = None) -> "Outcome[T]":
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def failed(cls, error: DaybookError) -> "Outcome[T]":
        return cls(OutcomeStatus.FAILED, error=error)

    @classmethod
    def cancelled(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.CANCELLED)

    @property
    def is_ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    @property
    def is_failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED

    @property
    def is_cancelled(self) -> bool:
        return self.status is OutcomeStatus.CANCELLED


Stage = Callable[[Any], Union[Any, Awaitable[Any]]]


def is_cancelled(value: Any) -> bool:
    return value is CANCELLED


async def run_pipeline(value: Any, *stages: Stage, name: str = "command") -> Outcome:
    """Feed ``value`` through ``stages`` in order.

    Errors other than ``DaybookError`` are logged with their traceback and
    wrapped in a ``CommandError`` so callers only ever see tagged errors.
    """
    if is_cancelled(value):
        return Outcome.cancelled()

    for stage in stages:
        stage_name = getattr(stage, "__name__", repr(stage))
        try:
            result = stage(value)
            if inspect.isawaitable(result):
                result = await result
        except DaybookError as exc:
            logger.info(f"{name}: stage {stage_name} failed: {exc}")
            return Outcome.failed(exc)
        except Exception as exc:
            logger.exception(f"{name}: stage {stage_name} raised unexpectedly")
            return Outcome.failed(
                CommandError(f"{stage_name} failed: {exc}", details={"stage": stage_name})
            )

        if is_cancelled(result):
            logger.debug(f"{name}: cancelled at stage {stage_name}")
            return Outcome.cancelled()
        value = result

    return Outcome.ok(value)


__all__ = [
    "CANCELLED",
    "Outcome",
    "OutcomeStatus",
    "Stage",
    "is_cancelled",
    "run_pipeline",
]
