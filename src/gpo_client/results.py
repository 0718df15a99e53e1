from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

from .errors import GPOClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: GPOClientError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]


def returns_result(func: Callable[..., T]) -> Callable[..., Result]:
    """
    Wrap a method that raises GPOClientError so it returns Ok/Err instead.
    Anything that is not a GPOClientError (i.e. a bug) still propagates.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return Ok(func(*args, **kwargs))
        except GPOClientError as e:
            return Err(e)
    return wrapper


def collect(
    results: Sequence[Optional[Result]],
    *,
    continue_on_error: bool = False,
    labels: Optional[Sequence[Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> Result:
    """
    Reduce per-branch results (in input order) to a single Result.

    - continue_on_error=False: return the first Err in input order, else Ok(list of values).
    - continue_on_error=True: drop Err branches (logging each one) and return Ok(values).

    Slots left as None belong to branches cancelled after a fail-fast error; they
    only occur alongside at least one Err.
    """
    values: List[Any] = []
    for i, res in enumerate(results):
        label = labels[i] if labels is not None else i
        if res is None:
            continue
        if res.ok:
            values.append(res.value)
            continue
        if not continue_on_error:
            return res
        if logger is not None:
            logger.error(f"Dropping {label}: {type(res.error).__name__}: {res.error}")
    if not continue_on_error and any(r is None for r in results):
        # None slots only come from fail-fast cancellation
        raise RuntimeError("fan-out returned cancelled branches without an error")
    return Ok(values)
