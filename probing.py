"""Ordered "try A, then B, then C" probing shared by detection and name resolution."""

import logging
from typing import Awaitable, Callable, Iterable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

C = TypeVar("C")
V = TypeVar("V")


async def first_match(
    candidates: Iterable[C],
    attempt: Callable[[C], Awaitable[Optional[V]]],
    label: str = "probe",
) -> Optional[Tuple[C, V]]:
    """
    Run attempt() against each candidate in order and return the first hit.

    An attempt that returns None is a miss. An attempt that raises is logged
    at debug level and also counts as a miss, so one broken candidate never
    stops the scan. Candidates are awaited one at a time.

    Returns:
        (candidate, value) for the first match, or None once exhausted
    """
    for candidate in candidates:
        try:
            value = await attempt(candidate)
        except Exception as e:
            logger.debug(f"{label} on {candidate} failed: {e}")
            continue

        if value is not None:
            logger.debug(f"{label} matched on {candidate}")
            return candidate, value

        logger.debug(f"{label} found nothing on {candidate}")

    return None
