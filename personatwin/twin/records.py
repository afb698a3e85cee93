"""
Flattened twin records handed to persistence, and twin-to-twin compatibility.
"""
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from .persona import PersonaTraits
from ..interview.models import PersonalityDimension
from ..profile.models import PersonalityProfile

TRAIT_THRESHOLD = 0.6


@dataclass
class StoredTwin:
    """Twin summary with four bounded scores used for matching."""
    communication_style: str
    interests: List[str] = field(default_factory=list)
    personality_traits: List[str] = field(default_factory=list)
    conversation_patterns: List[str] = field(default_factory=list)
    formality_score: float = 0.5
    analytical_score: float = 0.5
    verbosity_score: float = 0.5
    question_frequency: float = 0.5
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    last_updated: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        for name in ("formality_score", "analytical_score", "verbosity_score", "question_frequency"):
            setattr(self, name, float(np.clip(getattr(self, name), 0.0, 1.0)))

    @classmethod
    def from_persona(cls, traits: PersonaTraits,
                     clock: Callable[[], datetime] = datetime.now) -> "StoredTwin":
        """Record for a persona built from imported conversations."""
        now = clock()
        style = traits.communication_style
        return cls(
            communication_style=style.description,
            interests=list(traits.interests),
            personality_traits=list(traits.personality_traits),
            conversation_patterns=list(traits.conversation_patterns),
            formality_score=style.formality,
            analytical_score=style.analytical_score,
            verbosity_score=style.verbosity,
            question_frequency=style.question_frequency,
            created_at=now,
            last_updated=now,
        )

    @classmethod
    def from_profile(cls, profile: PersonalityProfile,
                     conversation_patterns: Optional[List[str]] = None,
                     clock: Callable[[], datetime] = datetime.now) -> "StoredTwin":
        """Record for a profile synthesized from an interview."""
        now = clock()
        traits = [
            dimension.value.replace("_", " ").title()
            for dimension, score in profile.dimensions.items()
            if score > TRAIT_THRESHOLD
        ]
        return cls(
            communication_style=profile.communication_style.description,
            interests=list(profile.comfort_topics),
            personality_traits=traits,
            conversation_patterns=list(conversation_patterns or []),
            formality_score=profile.dimension(PersonalityDimension.FORMALITY),
            analytical_score=profile.dimension(PersonalityDimension.ANALYTICAL_THINKING),
            verbosity_score=profile.dimension(PersonalityDimension.DETAIL_ORIENTATION),
            question_frequency=profile.dimension(PersonalityDimension.OPENNESS),
            created_at=now,
            last_updated=now,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["last_updated"] = self.last_updated.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredTwin":
        """Inverse of to_dict. Unknown keys are ignored."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        for key in ("created_at", "last_updated"):
            if isinstance(known.get(key), str):
                known[key] = datetime.fromisoformat(known[key])
        return cls(**known)


@dataclass(frozen=True)
class CompatibilityScore:
    score: float  # 0-100
    strengths: List[str] = field(default_factory=list)
    complementary_traits: List[str] = field(default_factory=list)


def calculate_compatibility(twin1: StoredTwin, twin2: StoredTwin) -> CompatibilityScore:
    """
    Score how well two twins would get along.

    Shared interests and similar analytical levels count in favor; formality,
    question-asking and verbosity score best when the two differ moderately.

    Args:
        twin1: Twin whose interest list is the reference for overlap
        twin2: Twin being compared

    Returns:
        CompatibilityScore capped at 100
    """
    shared = sorted(set(twin1.interests) & set(twin2.interests))
    interest_score = len(shared) / max(len(twin1.interests), 1) * 30

    formality_diff = abs(twin1.formality_score - twin2.formality_score)
    formality_score = 20 if 0.3 < formality_diff < 0.7 else 10

    analytical_diff = abs(twin1.analytical_score - twin2.analytical_score)
    analytical_score = 20 if analytical_diff < 0.3 else 10

    question_balance = abs(twin1.question_frequency - twin2.question_frequency)
    question_score = 20 if 0.3 < question_balance < 0.7 else 10

    verbosity_diff = abs(twin1.verbosity_score - twin2.verbosity_score)
    verbosity_score = 10 if verbosity_diff > 0.3 else 5

    total = interest_score + formality_score + analytical_score + question_score + verbosity_score

    strengths = []
    if shared:
        strengths.append(f"Shared interests: {', '.join(shared)}")
    if formality_diff > 0.3:
        strengths.append("Balanced communication styles")

    complementary = []
    if question_balance > 0.3:
        complementary.append("Natural conversation flow")
    if verbosity_diff > 0.3:
        complementary.append("Complementary detail levels")

    return CompatibilityScore(
        score=float(np.minimum(total, 100.0)),
        strengths=strengths,
        complementary_traits=complementary,
    )
