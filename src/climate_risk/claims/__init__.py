"""
Claims Module

Damage estimation and automated claim disposition.
"""

from .damage_triage import DAMAGE_MODELS, DamageModel, assess_damage_and_triage

__all__ = ["DAMAGE_MODELS", "DamageModel", "assess_damage_and_triage"]
