"""Personality profile synthesis."""

from .models import (
    PersonalityProfile, CommunicationStyle, HumorStyle, HumorType,
    SocialStyle, ThinkingStyle, EmotionalStyle, PersonalitySignature
)
from .synthesizer import PersonalitySynthesizer

__all__ = [
    "PersonalityProfile", "CommunicationStyle", "HumorStyle", "HumorType",
    "SocialStyle", "ThinkingStyle", "EmotionalStyle", "PersonalitySignature",
    "PersonalitySynthesizer"
]
