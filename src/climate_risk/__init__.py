"""
Climate Risk Platform

Risk scoring, parametric triggers and claim triage for climate disasters.
"""

from climate_risk.claims import assess_damage_and_triage
from climate_risk.risk_scoring import compute_risk_profile, compute_risk_profiles
from climate_risk.triggers import evaluate_parametric_triggers

__version__ = "1.0.0"

__all__ = [
    "assess_damage_and_triage",
    "compute_risk_profile",
    "compute_risk_profiles",
    "evaluate_parametric_triggers",
]
