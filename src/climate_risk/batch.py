"""
Roster fan-out.

Runs one fetch per monitored location on a thread pool. A location whose
fetch raises or returns no data becomes a LocationFailure; its siblings
carry on. Results come back in roster order regardless of completion order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from climate_risk.models import LocationFailure, MonitoredLocation

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[MonitoredLocation], Optional[T]]


def _safe_fetch(fetch: Fetcher, location: MonitoredLocation):
    try:
        data = fetch(location)
    except Exception as e:
        logger.error(f"Error fetching data for {location.name}: {e}")
        return None, LocationFailure(location.name, str(e) or type(e).__name__)
    if data is None:
        logger.error(f"No data returned for {location.name}")
        return None, LocationFailure(location.name, "no data returned")
    return data, None


def fetch_roster(
    roster: Sequence[MonitoredLocation],
    fetch: Fetcher,
    max_workers: int = 6,
) -> Tuple[List[Tuple[MonitoredLocation, T]], List[LocationFailure]]:
    """
    Fetch data for every location concurrently

    Args:
        roster: Locations to evaluate
        fetch: Callable returning the data for one location (None = unavailable)
        max_workers: Thread pool size

    Returns:
        (successes, failures), both in roster order
    """
    if not roster:
        return [], []

    outcomes: Dict[int, tuple] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(roster)))) as executor:
        future_to_index = {
            executor.submit(_safe_fetch, fetch, location): index
            for index, location in enumerate(roster)
        }
        for future in as_completed(future_to_index):
            outcomes[future_to_index[future]] = future.result()

    successes = []
    failures = []
    for index, location in enumerate(roster):
        data, failure = outcomes[index]
        if failure is not None:
            failures.append(failure)
        else:
            successes.append((location, data))

    logger.info(
        f"Roster fetch complete: {len(successes)} succeeded, {len(failures)} failed"
    )
    return successes, failures
