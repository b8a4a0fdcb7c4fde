"""
FastAPI REST API for the Climate Risk Platform

Provides RESTful endpoints for risk profiles, parametric triggers and
claim triage.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from datetime import date, datetime
import logging

from climate_risk.api_connectors import OpenMeteoConnector, OpenElevationConnector
from climate_risk.claims import assess_damage_and_triage
from climate_risk.config import DEFAULT_LOCATIONS, settings
from climate_risk.errors import register_error_handlers
from climate_risk.models import MonitoredLocation
from climate_risk.risk_scoring import (
    compute_risk_profile,
    compute_risk_profiles,
    hazard_highlights,
    summarize_portfolio,
)
from climate_risk.triggers import evaluate_parametric_triggers

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Climate-disaster risk scoring, parametric triggers and claim triage",
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Initialize connectors
weather_connector = OpenMeteoConnector()
elevation_connector = OpenElevationConnector()


# Pydantic models
class LocationInput(BaseModel):
    location_name: str = Field(..., min_length=1, description="Display name of the location")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude (-90 to 90)")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude (-180 to 180)")
    flood_prone: bool = False
    wildfire_prone: bool = False

    def to_location(self) -> MonitoredLocation:
        return MonitoredLocation(
            self.location_name, self.latitude, self.longitude,
            flood_prone=self.flood_prone, wildfire_prone=self.wildfire_prone,
        )


class CurrentWeatherOut(BaseModel):
    temperature: float
    humidity: float
    precipitation: float
    wind_speed: float


class RiskProfileResponse(BaseModel):
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
    risk_level: str
    highlights: List[str]
    elevation: Optional[float] = None
    current_weather: Optional[CurrentWeatherOut] = None


class PortfolioInput(BaseModel):
    locations: List[LocationInput] = Field(
        default_factory=list, description="Roster to score; empty uses the default roster"
    )


class LocationFailureOut(BaseModel):
    location_name: str
    reason: str


class PortfolioResponse(BaseModel):
    total_locations: int
    average_risk_score: float
    risk_distribution: Dict[str, int]
    highest_risk_locations: List[Dict]
    profiles: List[RiskProfileResponse]
    failures: List[LocationFailureOut]
    timestamp: datetime


class TriggerOut(BaseModel):
    trigger_id: str
    parameter: str
    threshold: float
    current_value: float
    triggered: bool
    location_name: str
    date_checked: date


class TriggerResponse(BaseModel):
    triggers: List[TriggerOut]
    failures: List[LocationFailureOut]
    activation_policy: str


class DamageInput(BaseModel):
    location_name: str = Field(..., min_length=1)
    disaster_type: str = Field(..., min_length=1, description="Flood, Wildfire, Storm, Hurricane, Earthquake or Other")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class DamageAnalysisOut(BaseModel):
    temperature: float
    precipitation: float
    wind_speed: float
    confidence: int


class DamageResponse(BaseModel):
    location_name: str
    disaster_type: str
    damage_score: float
    claim_amount_usd: int
    claim_status: str
    auto_approved: bool
    analysis: DamageAnalysisOut
    date_analyzed: date


def _profile_response(profile) -> RiskProfileResponse:
    return RiskProfileResponse(
        **profile.to_dict(),
        risk_level=profile.risk_band.value,
        highlights=hazard_highlights(profile),
    )


# API Endpoints

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": {
            "health": "/health",
            "risk_assessment": "/api/v1/risk/location",
            "portfolio_analysis": "/api/v1/risk/portfolio",
            "parametric_triggers": "/api/v1/triggers",
            "claim_analysis": "/api/v1/claims/analyze",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
    }


@app.post("/api/v1/risk/location", response_model=RiskProfileResponse)
def assess_location_risk(location: LocationInput):
    """
    Assess climate risk for a single location

    Missing weather or elevation data degrades to the documented defaults.
    """
    raw_signal = weather_connector.get_current_conditions(location.latitude, location.longitude)
    if raw_signal is None:
        logger.warning(f"No weather for {location.location_name}, scoring with defaults")
    elevation = elevation_connector.get_elevation(location.latitude, location.longitude)

    profile = compute_risk_profile(
        location.location_name,
        location.latitude,
        location.longitude,
        raw_signal,
        elevation,
    )
    return _profile_response(profile)


@app.post("/api/v1/risk/portfolio", response_model=PortfolioResponse)
def assess_portfolio_risk(portfolio: PortfolioInput):
    """
    Assess risk across a roster of locations

    Locations whose weather fetch fails are listed under failures.
    """
    roster = [loc.to_location() for loc in portfolio.locations] or list(DEFAULT_LOCATIONS)

    batch = compute_risk_profiles(
        roster,
        weather_connector.fetch_location_signal,
        elevation_connector.fetch_location_elevation,
        max_workers=settings.BATCH_MAX_WORKERS,
    )
    summary = summarize_portfolio(batch.profiles)

    return PortfolioResponse(
        **summary,
        profiles=[_profile_response(p) for p in batch.profiles],
        failures=[f.to_dict() for f in batch.failures],
        timestamp=datetime.now(),
    )


@app.get("/api/v1/triggers", response_model=TriggerResponse)
def get_parametric_triggers():
    """Evaluate parametric triggers for the monitored roster"""
    batch = evaluate_parametric_triggers(
        DEFAULT_LOCATIONS,
        weather_connector.fetch_location_signal,
        policy=settings.TRIGGER_ACTIVATION,
        max_workers=settings.BATCH_MAX_WORKERS,
    )
    return TriggerResponse(
        triggers=[t.to_dict() for t in batch.triggers],
        failures=[f.to_dict() for f in batch.failures],
        activation_policy=settings.TRIGGER_ACTIVATION,
    )


@app.post("/api/v1/claims/analyze", response_model=DamageResponse)
def analyze_damage(claim: DamageInput):
    """Estimate damage for a reported disaster and triage the claim"""
    logger.info(f"Analyzing damage for {claim.location_name} - {claim.disaster_type}")
    raw_signal = weather_connector.get_current_conditions(claim.latitude, claim.longitude)

    assessment = assess_damage_and_triage(claim.disaster_type, raw_signal)
    return DamageResponse(location_name=claim.location_name, **assessment.to_dict())


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
