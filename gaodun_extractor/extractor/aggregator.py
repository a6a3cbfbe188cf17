"""Merging of concurrent branch outcomes into one ordered result."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence, TypeVar

from ..models import BranchError, ExtractionResult, MediaDescriptor
from ..utils.http_client import AuthenticationError

T = TypeVar("T")


class RequestGate:
    """Caps the number of outbound calls in flight for one extraction run.

    The semaphore is only held around a single network call, never across a
    join on child tasks, so arbitrarily deep trees cannot starve it.
    """

    def __init__(self, max_in_flight: int) -> None:
        self._semaphore = asyncio.Semaphore(max_in_flight)

    async def call(self, func: Callable[..., T], *args: Any) -> T:
        """Runs a blocking gateway call in a worker thread once a slot is free."""

        async with self._semaphore:
            return await asyncio.to_thread(func, *args)

    async def run(self, awaitable: Awaitable[T]) -> T:
        async with self._semaphore:
            return await awaitable


def collect(outcomes: Sequence[Any], labels: Sequence[str], scope: str) -> ExtractionResult:
    """Folds ``asyncio.gather(..., return_exceptions=True)`` output into one result.

    Outcomes may be descriptors, nested results, ``None`` (nothing to emit) or
    exceptions. Exceptions become ``BranchError`` entries, except for
    authentication failures which abort the whole extraction.
    """

    result = ExtractionResult()
    for label, outcome in zip(labels, outcomes):
        if isinstance(outcome, AuthenticationError):
            raise outcome
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            logging.error("Dropping %s %s: %s", scope, label, outcome)
            result.errors.append(BranchError(scope=scope, label=label, message=str(outcome) or type(outcome).__name__))
        elif isinstance(outcome, ExtractionResult):
            result.descriptors.extend(outcome.descriptors)
            result.errors.extend(outcome.errors)
        elif isinstance(outcome, MediaDescriptor):
            result.descriptors.append(outcome)
    return result


async def gather_branches(
    awaitables: Sequence[Awaitable[Any]],
    labels: Sequence[str],
    scope: str,
) -> ExtractionResult:
    """Runs sibling branches concurrently and merges them in source order."""

    if not awaitables:
        return ExtractionResult()
    outcomes = await asyncio.gather(*awaitables, return_exceptions=True)
    return collect(outcomes, labels, scope)
