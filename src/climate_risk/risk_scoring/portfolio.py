"""
Portfolio Risk Module

Scores a roster of locations and summarizes the result set.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence

import pandas as pd

from climate_risk.batch import fetch_roster
from climate_risk.models import (
    MonitoredLocation,
    RawSignal,
    RiskBand,
    RiskProfile,
    RiskProfileBatch,
)
from climate_risk.risk_scoring.risk_scorer import RiskScorer, compute_risk_profile

logger = logging.getLogger(__name__)

SignalFetcher = Callable[[MonitoredLocation], Optional[RawSignal]]
ElevationFetcher = Callable[[MonitoredLocation], Optional[float]]


def compute_risk_profiles(
    roster: Sequence[MonitoredLocation],
    signal_fetcher: SignalFetcher,
    elevation_fetcher: Optional[ElevationFetcher] = None,
    scorer: Optional[RiskScorer] = None,
    max_workers: int = 6,
) -> RiskProfileBatch:
    """
    Compute a RiskProfile for every roster location

    A location whose weather fetch fails, or whose data cannot be scored,
    is skipped and reported; a missing elevation only degrades precision
    (falls back to 0 m).
    """
    scorer = scorer or RiskScorer()

    def score(location: MonitoredLocation) -> Optional[RiskProfile]:
        raw = signal_fetcher(location)
        if raw is None:
            return None
        elevation = elevation_fetcher(location) if elevation_fetcher else None
        return compute_risk_profile(
            location.name, location.latitude, location.longitude,
            raw, elevation, scorer=scorer,
        )

    scored, failures = fetch_roster(roster, score, max_workers=max_workers)
    profiles = [profile for _, profile in scored]
    return RiskProfileBatch(profiles=profiles, failures=failures)


def profiles_to_frame(profiles: Sequence[RiskProfile]) -> pd.DataFrame:
    """Flatten profiles into a DataFrame, one row per location"""
    columns = [
        "location_name", "latitude", "longitude", "flood_risk", "wildfire_risk",
        "storm_risk", "vegetation_dryness", "risk_score", "historical_events",
    ]
    if not profiles:
        return pd.DataFrame(columns=columns + ["risk_level"])

    df = pd.DataFrame([{c: getattr(p, c) for c in columns} for p in profiles])
    df["risk_level"] = [p.risk_band.value for p in profiles]
    return df


def summarize_portfolio(profiles: Sequence[RiskProfile], top_n: int = 5) -> Dict[str, Any]:
    """
    Aggregate metrics across scored locations

    Returns:
        Dictionary with total, average score, band distribution and the
        highest-risk locations
    """
    df = profiles_to_frame(profiles)
    distribution = {band.value: 0 for band in (RiskBand.HIGH, RiskBand.MEDIUM, RiskBand.LOW)}

    if df.empty:
        return {
            "total_locations": 0,
            "average_risk_score": 0.0,
            "risk_distribution": distribution,
            "highest_risk_locations": [],
        }

    counts = df["risk_level"].value_counts()
    distribution.update({level: int(n) for level, n in counts.items()})

    highest = (
        df.sort_values("risk_score", ascending=False, kind="stable")
        .head(top_n)[["location_name", "risk_score", "risk_level"]]
    )

    return {
        "total_locations": len(df),
        "average_risk_score": round(float(df["risk_score"].mean()), 1),
        "risk_distribution": distribution,
        "highest_risk_locations": highest.to_dict(orient="records"),
    }
