"""
Tests for the Damage & Claim Triage Engine.

Covers:
    • Per-disaster damage formulas with pinned jitter
    • Claim pricing
    • Claim status bands and their boundaries
    • Disaster type parsing
"""

from __future__ import annotations

from datetime import date

import pytest

from climate_risk.claims import assess_damage_and_triage
from climate_risk.errors import InvalidInputError
from climate_risk.models import (
    ClaimStatus,
    DamageAnalysis,
    DamageAssessment,
    DisasterType,
    RawSignal,
)


# ═══════════════════════════════════════════════════════════════════════════
# Damage formulas
# ═══════════════════════════════════════════════════════════════════════════

class TestDamageScores:
    def test_flood_heavy_rain_clamps_to_one(self, zero_rng):
        result = assess_damage_and_triage("Flood", {"precipitation": 80}, rng=zero_rng)
        assert result.damage_score == 1.0
        assert result.claim_amount_usd == 180000
        assert result.claim_status is ClaimStatus.APPROVED
        assert result.auto_approved

    def test_flood_dry_is_rejected(self, zero_rng):
        result = assess_damage_and_triage("Flood", {"precipitation": 0}, rng=zero_rng)
        assert result.damage_score == 0.3
        assert result.claim_amount_usd == 110000
        assert result.claim_status is ClaimStatus.REJECTED

    def test_flood_full_jitter(self, fixed_rng):
        result = assess_damage_and_triage("flood", {"precipitation": 0}, rng=fixed_rng(1.0))
        assert result.damage_score == 0.7

    def test_wildfire_default_temperature(self, zero_rng):
        result = assess_damage_and_triage("Wildfire", None, rng=zero_rng)
        assert result.damage_score == 0.7  # 0.3 + 20/50
        assert result.claim_amount_usd == 154000
        assert result.auto_approved

    def test_wildfire_freezing_floors_at_zero(self, zero_rng):
        result = assess_damage_and_triage("Wildfire", {"temperature": -100}, rng=zero_rng)
        assert result.damage_score == 0.0
        assert result.claim_amount_usd == 70000
        assert result.claim_status is ClaimStatus.REJECTED

    @pytest.mark.parametrize("disaster", ["Storm", "Hurricane"])
    def test_wind_driven(self, disaster, zero_rng):
        calm = assess_damage_and_triage(disaster, {"wind_speed": 0}, rng=zero_rng)
        assert calm.damage_score == 0.4
        assert calm.claim_amount_usd == 120000
        assert calm.claim_status is ClaimStatus.UNDER_REVIEW

        gale = assess_damage_and_triage(disaster, {"wind_speed": 45}, rng=zero_rng)
        assert gale.damage_score == 0.85
        assert gale.claim_amount_usd == 187500

    @pytest.mark.parametrize("disaster", ["Earthquake", "Other"])
    def test_no_correlated_signal(self, disaster, zero_rng, fixed_rng):
        low = assess_damage_and_triage(disaster, {"precipitation": 500}, rng=zero_rng)
        assert low.damage_score == 0.5
        assert low.claim_amount_usd == 100000

        high = assess_damage_and_triage(disaster, None, rng=fixed_rng(1.0))
        assert high.damage_score == 0.8
        assert high.claim_amount_usd == 130000

    def test_analysis_echoes_conditions(self, zero_rng):
        raw = RawSignal(temperature=31, precipitation=12, wind_speed=22)
        result = assess_damage_and_triage("Storm", raw, rng=zero_rng, as_of=date(2026, 10, 18))
        assert result.analysis == DamageAnalysis(31, 12, 22, 70)
        assert result.to_dict()["date_analyzed"] == "2026-10-18"

    def test_confidence_range(self, fixed_rng):
        result = assess_damage_and_triage("Flood", None, rng=fixed_rng(1.0))
        assert result.analysis.confidence == 95

    def test_production_random_source(self):
        for _ in range(50):
            result = assess_damage_and_triage("Flood", {"precipitation": 20})
            assert 0.0 <= result.damage_score <= 1.0
            assert 70 <= result.analysis.confidence <= 95
            assert result.auto_approved == (result.damage_score >= 0.70)


# ═══════════════════════════════════════════════════════════════════════════
# Claim status bands
# ═══════════════════════════════════════════════════════════════════════════

def _assessment(score: float) -> DamageAssessment:
    return DamageAssessment(
        disaster_type=DisasterType.FLOOD,
        damage_score=score,
        claim_amount_usd=0,
        analysis=DamageAnalysis(20, 0, 0, 80),
        date_analyzed=date(2026, 10, 18),
    )


class TestClaimStatus:
    @pytest.mark.parametrize("score, status, auto", [
        (0.85, ClaimStatus.APPROVED, True),
        (0.70, ClaimStatus.APPROVED, True),
        (0.69, ClaimStatus.UNDER_REVIEW, False),
        (0.55, ClaimStatus.UNDER_REVIEW, False),
        (0.40, ClaimStatus.UNDER_REVIEW, False),
        (0.39, ClaimStatus.REJECTED, False),
        (0.20, ClaimStatus.REJECTED, False),
        (0.0, ClaimStatus.REJECTED, False),
        (1.0, ClaimStatus.APPROVED, True),
    ])
    def test_bands(self, score, status, auto):
        assessment = _assessment(score)
        assert assessment.claim_status is status
        assert assessment.auto_approved is auto

    def test_serialized_status(self):
        data = _assessment(0.55).to_dict()
        assert data["claim_status"] == "Under Review"
        assert data["auto_approved"] is False


# ═══════════════════════════════════════════════════════════════════════════
# Disaster types
# ═══════════════════════════════════════════════════════════════════════════

class TestDisasterType:
    @pytest.mark.parametrize("name, expected", [
        ("flood", DisasterType.FLOOD),
        ("WILDFIRE", DisasterType.WILDFIRE),
        (" Hurricane ", DisasterType.HURRICANE),
        ("other", DisasterType.OTHER),
    ])
    def test_parse(self, name, expected):
        assert DisasterType.parse(name) is expected

    @pytest.mark.parametrize("name", ["Tsunami", "", None])
    def test_unrecognized_rejected(self, name, zero_rng):
        with pytest.raises(InvalidInputError) as exc:
            assess_damage_and_triage(name, None, rng=zero_rng)
        assert exc.value.status_code == 422
