"""
Personality profile data structures produced by the synthesizer.
"""
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Any

from ..interview.models import PersonalityDimension


class HumorType(str, Enum):
    DRY = "dry"
    SILLY = "silly"
    SARCASTIC = "sarcastic"
    WITTY = "witty"
    OBSERVATIONAL = "observational"
    SELF_DEPRECATING = "self_deprecating"
    NONE = "none"


@dataclass(frozen=True)
class CommunicationStyle:
    pace: str = "Balanced"
    formality: float = 0.5
    expressiveness: float = 0.5
    directness: float = 0.0
    warmth: float = 0.0
    detail: str = "Gets to the point"
    examples: List[str] = field(default_factory=list)

    @property
    def description(self) -> str:
        """Short human-readable summary, e.g. 'Casual and expressive'."""
        if self.formality > 0.7:
            formality = "formal"
        elif self.formality > 0.3:
            formality = "balanced"
        else:
            formality = "casual"
        if self.expressiveness > 0.7:
            expressiveness = "expressive"
        elif self.expressiveness > 0.3:
            expressiveness = "moderate"
        else:
            expressiveness = "reserved"
        return f"{formality.capitalize()} and {expressiveness}"


@dataclass(frozen=True)
class HumorStyle:
    primary_type: HumorType = HumorType.OBSERVATIONAL
    frequency: float = 0.0
    triggers: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SocialStyle:
    energy: str = "Introverted - selective sharing"
    group_preference: str = "One-on-one or solo"
    initiation_style: str = "Shares experiences"
    boundary_style: str = "Balanced - shares gradually"
    conflict_approach: str = "Diplomatic"


@dataclass(frozen=True)
class ThinkingStyle:
    approach: str = "Intuitive"
    processing: str = "Quick"
    focus: str = "Balanced between big picture and details"
    examples: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class EmotionalStyle:
    expression: str = "Reserved"
    regulation: str = "Balanced emotional regulation"
    empathy_level: float = 0.0
    vulnerability_comfort: float = 0.0


@dataclass(frozen=True)
class PersonalitySignature:
    """Stylistic fingerprint: pet phrases, fillers and laugh markers."""
    unique_phrases: List[str] = field(default_factory=list)
    filler: List[str] = field(default_factory=list)
    greeting_style: str = "Hi!"
    signoff_style: str = "Talk soon!"
    laugh_style: List[str] = field(default_factory=list)
    agreement_style: List[str] = field(default_factory=list)
    disagreement_style: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PersonalityProfile:
    """Locally synthesized personality profile. Read-only once produced."""
    dimensions: Dict[PersonalityDimension, float]
    communication_style: CommunicationStyle = field(default_factory=CommunicationStyle)
    humor_style: HumorStyle = field(default_factory=HumorStyle)
    social_style: SocialStyle = field(default_factory=SocialStyle)
    thinking_style: ThinkingStyle = field(default_factory=ThinkingStyle)
    emotional_style: EmotionalStyle = field(default_factory=EmotionalStyle)
    typical_responses: Dict[str, str] = field(default_factory=dict)
    conversation_starters: List[str] = field(default_factory=list)
    comfort_topics: List[str] = field(default_factory=list)
    avoidance_topics: List[str] = field(default_factory=list)
    stress_indicators: List[str] = field(default_factory=list)
    signature: PersonalitySignature = field(default_factory=PersonalitySignature)

    def dimension(self, dimension: PersonalityDimension) -> float:
        return self.dimensions.get(dimension, 0.5)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation with enum keys flattened to strings."""
        data = asdict(self)
        data["dimensions"] = {d.value: score for d, score in self.dimensions.items()}
        data["humor_style"]["primary_type"] = self.humor_style.primary_type.value
        data["communication_style"]["description"] = self.communication_style.description
        return data
