"""
Generic "first success" runner shared by every fallback cascade
(location tiers, IP providers, Overpass mirrors, routing providers).
"""
import logging
from typing import Awaitable, Callable, Optional, Sequence, Tuple, TypeVar

from places_finder.core.exceptions import CascadeExhausted
from places_finder.core.logger import logs

T = TypeVar("T")

Attempt = Tuple[str, Callable[[], Awaitable[T]]]


def _is_present(result) -> bool:
    return result is not None


async def first_success(
    attempts: Sequence[Attempt],
    label: str,
    accept: Optional[Callable[[T], bool]] = None,
) -> T:
    """
    Await each attempt in order and return the first accepted result.

    An attempt fails when it raises or when `accept` rejects its result;
    either way the next attempt runs. Attempts never overlap. When all of
    them fail, CascadeExhausted carries the collected errors (a rejected
    result is recorded as a ValueError).
    """
    accept = accept or _is_present
    errors = []
    total = len(attempts)

    for index, (name, attempt) in enumerate(attempts, start=1):
        try:
            result = await attempt()
        except Exception as e:
            logs.log(logging.WARNING, f"{label} attempt {index}/{total} ({name}) failed: {e!r}")
            errors.append(e)
            continue

        if not accept(result):
            logs.log(logging.INFO, f"{label} attempt {index}/{total} ({name}) returned nothing usable")
            errors.append(ValueError(f"{name} returned no usable result"))
            continue

        logs.log(logging.INFO, f"✓ {label} succeeded via {name}")
        return result

    raise CascadeExhausted(label, errors)
