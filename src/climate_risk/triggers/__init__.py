"""
Parametric Triggers

Threshold rules whose breach triggers a payout independent of assessed damage.
"""

from .parametric import (
    DEFAULT_RULES,
    ActivationPolicy,
    AirQualityRule,
    RainfallRule,
    RiverLevelRule,
    TriggerRule,
    WindSpeedRule,
    evaluate_parametric_triggers,
)

__all__ = [
    "DEFAULT_RULES",
    "ActivationPolicy",
    "AirQualityRule",
    "RainfallRule",
    "RiverLevelRule",
    "TriggerRule",
    "WindSpeedRule",
    "evaluate_parametric_triggers",
]
