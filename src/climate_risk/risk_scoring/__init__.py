"""
Risk Scoring Module

Normalize environmental signals and calculate hazard and composite risk scores.
"""

from .normalizer import normalize_conditions, normalize_signal, rainfall_accumulation
from .risk_scorer import (
    RiskScorer,
    classify_risk_band,
    compute_risk_profile,
    hazard_highlights,
)
from .portfolio import compute_risk_profiles, profiles_to_frame, summarize_portfolio

__all__ = [
    "RiskScorer",
    "classify_risk_band",
    "compute_risk_profile",
    "compute_risk_profiles",
    "hazard_highlights",
    "normalize_conditions",
    "normalize_signal",
    "profiles_to_frame",
    "rainfall_accumulation",
    "summarize_portfolio",
]
