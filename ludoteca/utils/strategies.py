# ludoteca/utils/strategies.py
"""Ordered fallback chains: try each strategy until one succeeds."""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class Outcome(str, Enum):
    SUCCESS = "success"
    CONTINUE = "continue"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class StrategyResult(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None
    reason: Optional[str] = None
    strategy: Optional[str] = None

    @classmethod
    def success(cls, value: T, strategy: Optional[str] = None) -> "StrategyResult[T]":
        return cls(Outcome.SUCCESS, value=value, strategy=strategy)

    @classmethod
    def skip(cls, reason: Optional[str] = None, strategy: Optional[str] = None) -> "StrategyResult[T]":
        return cls(Outcome.CONTINUE, reason=reason, strategy=strategy)

    @classmethod
    def exhausted(cls, reason: Optional[str] = None) -> "StrategyResult[T]":
        return cls(Outcome.EXHAUSTED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS


def first_success(strategies: Iterable[Callable[[], StrategyResult[T]]]) -> StrategyResult[T]:
    last_reason = None
    for strategy in strategies:
        result = strategy()
        if result.ok:
            return result
        last_reason = result.reason or last_reason
    return StrategyResult.exhausted(last_reason)


async def first_success_async(
    strategies: Iterable[Callable[[], Awaitable[StrategyResult[T]]]],
) -> StrategyResult[T]:
    last_reason = None
    for strategy in strategies:
        result = await strategy()
        if result.ok:
            return result
        last_reason = result.reason or last_reason
    return StrategyResult.exhausted(last_reason)
