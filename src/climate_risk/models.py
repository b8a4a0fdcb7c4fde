"""
Value objects passed between the scoring pipelines.

Every record is produced fresh per evaluation and is immutable once built.
Field names match the JSON the API returns.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from climate_risk.errors import InvalidInputError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class RiskBand(str, Enum):
    """Composite risk classification, closed on the lower bound of each band."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def for_score(cls, risk_score: float) -> "RiskBand":
        if risk_score >= 70:
            return cls.HIGH
        if risk_score >= 50:
            return cls.MEDIUM
        return cls.LOW


class ClaimStatus(str, Enum):
    APPROVED = "Approved"
    UNDER_REVIEW = "Under Review"
    REJECTED = "Rejected"

    @classmethod
    def for_damage_score(cls, damage_score: float) -> "ClaimStatus":
        if damage_score >= 0.70:
            return cls.APPROVED
        if damage_score < 0.40:
            return cls.REJECTED
        return cls.UNDER_REVIEW


class DisasterType(str, Enum):
    FLOOD = "Flood"
    WILDFIRE = "Wildfire"
    STORM = "Storm"
    HURRICANE = "Hurricane"
    EARTHQUAKE = "Earthquake"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Any) -> "DisasterType":
        """Case-insensitive lookup; unknown names are a caller error."""
        if isinstance(value, cls):
            return value
        name = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == name:
                return member
        raise InvalidInputError(
            f"Unrecognized disaster type: {value!r}",
            field="disaster_type",
            allowed=[m.value for m in cls],
        )


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawSignal:
    """Provider output before normalization; any field may be missing."""
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    precipitation: Optional[float] = None
    wind_speed: Optional[float] = None
    hourly_precipitation: Tuple[Optional[float], ...] = ()
    us_aqi: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "RawSignal":
        data = data or {}
        return cls(
            temperature=data.get("temperature"),
            humidity=data.get("humidity"),
            precipitation=data.get("precipitation"),
            wind_speed=data.get("wind_speed"),
            hourly_precipitation=tuple(data.get("hourly_precipitation") or ()),
            us_aqi=data.get("us_aqi"),
        )


@dataclass(frozen=True)
class EnvironmentalSignal:
    """Fully-populated signal; every field has a value."""
    temperature: float
    humidity: float
    precipitation: float
    rainfall_24h: float
    wind_speed: float
    elevation: float
    latitude: float
    longitude: float

    @property
    def is_coastal(self) -> bool:
        return abs(self.latitude) < 45 and self.elevation < 50


@dataclass(frozen=True)
class MonitoredLocation:
    name: str
    latitude: float
    longitude: float
    flood_prone: bool = False
    wildfire_prone: bool = False


@dataclass(frozen=True)
class LocationFailure:
    """A roster entry that could not be evaluated in a batch."""
    location_name: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Risk pipeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HazardScores:
    flood_risk: float
    wildfire_risk: float
    storm_risk: float
    vegetation_dryness: float


@dataclass(frozen=True)
class CurrentWeather:
    temperature: float
    humidity: float
    precipitation: float
    wind_speed: float


@dataclass(frozen=True)
class RiskProfile:
    location_name: str
    latitude: float
    longitude: float
    flood_risk: float
    wildfire_risk: float
    storm_risk: float
    vegetation_dryness: float
    avg_temp_c: int
    sea_level_rise_m: float
    historical_events: int
    risk_score: int
    elevation: Optional[float] = None
    current_weather: Optional[CurrentWeather] = None

    @property
    def risk_band(self) -> RiskBand:
        return RiskBand.for_score(self.risk_score)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RiskProfileBatch:
    profiles: List[RiskProfile] = field(default_factory=list)
    failures: List[LocationFailure] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Parametric triggers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParametricTrigger:
    trigger_id: str
    parameter: str
    threshold: float
    current_value: float
    location_name: str
    date_checked: date

    @property
    def triggered(self) -> bool:
        return self.current_value >= self.threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trigger_id": self.trigger_id,
            "parameter": self.parameter,
            "threshold": self.threshold,
            "current_value": self.current_value,
            "triggered": self.triggered,
            "location_name": self.location_name,
            "date_checked": self.date_checked.isoformat(),
        }


@dataclass(frozen=True)
class TriggerBatch:
    triggers: List[ParametricTrigger] = field(default_factory=list)
    failures: List[LocationFailure] = field(default_factory=list)

    @property
    def breached(self) -> List[ParametricTrigger]:
        return [t for t in self.triggers if t.triggered]


# ---------------------------------------------------------------------------
# Damage & claim triage
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DamageAnalysis:
    """Conditions the damage score was computed from."""
    temperature: float
    precipitation: float
    wind_speed: float
    confidence: int  # percent, advisory only


@dataclass(frozen=True)
class DamageAssessment:
    disaster_type: DisasterType
    damage_score: float
    claim_amount_usd: int
    analysis: DamageAnalysis
    date_analyzed: date

    @property
    def claim_status(self) -> ClaimStatus:
        return ClaimStatus.for_damage_score(self.damage_score)

    @property
    def auto_approved(self) -> bool:
        return self.claim_status is ClaimStatus.APPROVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "disaster_type": self.disaster_type.value,
            "damage_score": self.damage_score,
            "claim_amount_usd": self.claim_amount_usd,
            "claim_status": self.claim_status.value,
            "auto_approved": self.auto_approved,
            "analysis": asdict(self.analysis),
            "date_analyzed": self.date_analyzed.isoformat(),
        }
