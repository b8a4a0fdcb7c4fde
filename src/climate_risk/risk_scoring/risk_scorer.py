"""
Risk Scoring Module

Calculates per-hazard and composite risk scores for a location from current
weather and elevation signals.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from climate_risk.errors import InvalidInputError
from climate_risk.models import (
    CurrentWeather,
    EnvironmentalSignal,
    HazardScores,
    RawSignal,
    RiskBand,
    RiskProfile,
)
from climate_risk.numeric import clamp, round_half_up, round_int
from climate_risk.risk_scoring.normalizer import normalize_signal

logger = logging.getLogger(__name__)

# Sub-scores above this get called out to the user
HIGHLIGHT_THRESHOLD = 0.7


def _hundredths(score: float) -> int:
    return round_int(score * 100)


class RiskScorer:
    """Calculate hazard sub-scores (0-1) and the composite risk score (0-100)"""

    # Composite weight per hazard, in points out of 100
    HAZARD_WEIGHT = 25

    def calculate_flood_risk(self, signal: EnvironmentalSignal) -> float:
        """
        Flood risk (0-1)

        Based on:
        - Coastal exposure
        - Current precipitation
        - Very low ground (< 10 m)
        """
        coastal = 0.4 if signal.is_coastal else 0.1
        rain = 0.3 if signal.precipitation > 50 else signal.precipitation / 166
        low_ground = 0.3 if signal.elevation < 10 else 0.0
        return round_half_up(clamp(coastal + rain + low_ground), 2)

    def calculate_wildfire_risk(self, signal: EnvironmentalSignal) -> float:
        """
        Wildfire risk (0-1)

        Based on:
        - Temperature
        - Low relative humidity
        - Dry conditions (little precipitation)
        """
        heat = 0.4 if signal.temperature > 30 else signal.temperature / 75
        dry_air = 0.4 if signal.humidity < 30 else (100 - signal.humidity) / 250
        no_rain = 0.2 if signal.precipitation < 10 else 0.0
        return round_half_up(clamp(heat + dry_air + no_rain), 2)

    def calculate_storm_risk(self, signal: EnvironmentalSignal) -> float:
        """Storm risk (0-1) from wind speed, coastal exposure and heavy rain"""
        wind = 0.5 if signal.wind_speed > 50 else signal.wind_speed / 100
        coastal = 0.3 if signal.is_coastal else 0.1
        heavy_rain = 0.2 if signal.precipitation > 30 else 0.0
        return round_half_up(clamp(wind + coastal + heavy_rain), 2)

    def calculate_vegetation_dryness(self, signal: EnvironmentalSignal) -> float:
        """Vegetation dryness (0-1) from temperature, humidity and precipitation"""
        heat = 0.4 if signal.temperature > 25 else signal.temperature / 62.5
        dry_air = 0.4 if signal.humidity < 40 else (100 - signal.humidity) / 166
        no_rain = 0.2 if signal.precipitation < 20 else 0.0
        return round_half_up(clamp(heat + dry_air + no_rain), 2)

    def score_hazards(self, signal: EnvironmentalSignal) -> HazardScores:
        return HazardScores(
            flood_risk=self.calculate_flood_risk(signal),
            wildfire_risk=self.calculate_wildfire_risk(signal),
            storm_risk=self.calculate_storm_risk(signal),
            vegetation_dryness=self.calculate_vegetation_dryness(signal),
        )

    def calculate_composite_risk(
        self,
        location_name: str,
        hazards: HazardScores,
        signal: EnvironmentalSignal,
        elevation: Optional[float] = None,
    ) -> RiskProfile:
        """
        Combine hazard sub-scores into a RiskProfile

        Works in hundredths so the 2-decimal sub-scores add up without
        floating point drift before the final half-up rounding.

        Returns:
            RiskProfile with risk_score 0-100
        """
        flood = _hundredths(hazards.flood_risk)
        wildfire = _hundredths(hazards.wildfire_risk)
        storm = _hundredths(hazards.storm_risk)
        dryness = _hundredths(hazards.vegetation_dryness)

        total = flood + wildfire + storm + dryness
        risk_score = (self.HAZARD_WEIGHT * total + 50) // 100

        # Weighted proxy, not a measured count
        historical_events = (10 * flood + 10 * storm + 5 * wildfire + 50) // 100

        sea_level_rise_m = (flood + 1) // 2 / 100 if signal.is_coastal else 0.0

        return RiskProfile(
            location_name=location_name,
            latitude=signal.latitude,
            longitude=signal.longitude,
            flood_risk=hazards.flood_risk,
            wildfire_risk=hazards.wildfire_risk,
            storm_risk=hazards.storm_risk,
            vegetation_dryness=hazards.vegetation_dryness,
            avg_temp_c=round_int(signal.temperature),
            sea_level_rise_m=sea_level_rise_m,
            historical_events=int(historical_events),
            risk_score=int(risk_score),
            elevation=signal.elevation if elevation is not None else None,
            current_weather=CurrentWeather(
                temperature=signal.temperature,
                humidity=signal.humidity,
                precipitation=signal.precipitation,
                wind_speed=signal.wind_speed,
            ),
        )


def classify_risk_band(risk_score: float) -> RiskBand:
    """High >= 70, Medium >= 50, otherwise Low"""
    return RiskBand.for_score(risk_score)


def hazard_highlights(profile: RiskProfile) -> List[str]:
    """Short notes for the hazards that stand out in a profile"""
    notes = []
    if profile.flood_risk > HIGHLIGHT_THRESHOLD:
        notes.append("Significant flood risk detected.")
    if profile.wildfire_risk > HIGHLIGHT_THRESHOLD:
        notes.append("High wildfire probability.")
    if profile.storm_risk > HIGHLIGHT_THRESHOLD:
        notes.append("Elevated storm activity expected.")
    return notes


def compute_risk_profile(
    location_name: str,
    latitude: float,
    longitude: float,
    raw_signal: Union[RawSignal, Mapping[str, Any], None],
    elevation: Optional[float] = None,
    scorer: Optional[RiskScorer] = None,
) -> RiskProfile:
    """
    Score one location from a single signal snapshot

    Args:
        location_name: Display name, required
        latitude, longitude: Location coordinates
        raw_signal: Weather provider output; missing fields fall back to defaults
        elevation: Ground elevation in metres, None when unavailable

    Returns:
        RiskProfile
    """
    if not location_name or not str(location_name).strip():
        raise InvalidInputError("location_name is required", field="location_name")

    scorer = scorer or RiskScorer()
    signal = normalize_signal(raw_signal, latitude, longitude, elevation)
    hazards = scorer.score_hazards(signal)
    profile = scorer.calculate_composite_risk(location_name, hazards, signal, elevation)

    logger.info(
        f"Risk profile for {location_name}: score={profile.risk_score} "
        f"({profile.risk_band.value})"
    )
    return profile


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("RISK SCORING ALGORITHM TEST")
    print("=" * 60 + "\n")

    # Hot, dry, low-lying coastal city
    profile = compute_risk_profile(
        "Miami, FL", 25.7617, -80.1918,
        {"temperature": 35, "humidity": 20, "precipitation": 0, "wind_speed": 10},
        elevation=5,
    )

    print(f"Individual Hazard Scores:")
    print(f"  Flood Risk:          {profile.flood_risk:.2f}")
    print(f"  Wildfire Risk:       {profile.wildfire_risk:.2f}")
    print(f"  Storm Risk:          {profile.storm_risk:.2f}")
    print(f"  Vegetation Dryness:  {profile.vegetation_dryness:.2f}")
    print(f"\nComposite Risk Assessment:")
    print(f"  Risk Score:          {profile.risk_score}/100")
    print(f"  Risk Level:          {profile.risk_band.value}")
    for note in hazard_highlights(profile):
        print(f"  - {note}")
