"""
Data models for the interview system.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, List, Tuple


class QuestionCategory(str, Enum):
    """Interview question categories."""
    ICEBREAKER = "icebreaker"
    SITUATIONAL = "situational"
    HUMOR = "humor"
    PHILOSOPHICAL = "philosophical"
    SMALL_TALK = "small_talk"
    EMOTIONAL = "emotional"
    VALUES = "values"
    SOCIAL = "social"


class PersonalityDimension(str, Enum):
    """The twelve fixed personality axes, each scored in [0, 1]."""
    FORMALITY = "formality"
    EMOTIONAL_EXPRESSION = "emotional_expression"
    HUMOR = "humor"
    ANALYTICAL_THINKING = "analytical_thinking"
    EMPATHY = "empathy"
    ASSERTIVENESS = "assertiveness"
    OPENNESS = "openness"
    OPTIMISM = "optimism"
    DETAIL_ORIENTATION = "detail_orientation"
    SPONTANEITY = "spontaneity"
    CONFLICT_STYLE = "conflict_style"
    SOCIAL_ENERGY = "social_energy"


class PunctuationStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    EXPRESSIVE = "expressive"
    MINIMAL = "minimal"


class EmotionalTone(str, Enum):
    ENTHUSIASTIC = "enthusiastic"
    NEUTRAL = "neutral"
    CONTEMPLATIVE = "contemplative"
    HUMOROUS = "humorous"
    SERIOUS = "serious"
    ANXIOUS = "anxious"


class PatternType(str, Enum):
    STORYTELLER = "storyteller"
    FACTUAL = "factual"
    EMOTIONAL = "emotional"
    QUESTIONING = "questioning"
    DEFLECTING = "deflecting"
    SELF_DEPRECATING = "self_deprecating"
    CONFIDENT = "confident"
    ANALYTICAL = "analytical"
    CREATIVE = "creative"
    PRAGMATIC = "pragmatic"


@dataclass(frozen=True)
class PersonalityMarker:
    """A keyword signal inside an answer that points at one dimension."""
    dimension: PersonalityDimension
    weight: float
    indicator: str


@dataclass(frozen=True)
class Question:
    """One hand-authored interview question.

    ``follow_ups`` is ordered: when several trigger keywords match an answer,
    the first entry wins.
    """
    id: int
    category: QuestionCategory
    prompt: str
    sub_prompt: Optional[str] = None
    follow_ups: Dict[str, str] = field(default_factory=dict)
    analysis_weights: Dict[PersonalityDimension, float] = field(default_factory=dict)
    response_patterns: Dict[str, PersonalityMarker] = field(default_factory=dict)


@dataclass(frozen=True)
class Response:
    """Features extracted from a single answer."""
    question_id: int
    text: str
    response_time: float
    word_count: int
    sentiment_score: float
    emoji_count: int
    punctuation_style: PunctuationStyle
    timestamp: datetime


@dataclass(frozen=True)
class CommunicationPattern:
    """A recurring communication habit found across responses."""
    pattern_type: PatternType
    frequency: int
    examples: Tuple[str, ...] = ()


@dataclass
class ChatMessage:
    """Represents a single transcript entry."""
    content: str
    is_bot: bool
    timestamp: datetime
    is_sub_prompt: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class ConversationContext:
    """Mutable interview state. Only the orchestrator writes to it."""
    current_question_index: int = 0
    responses: List[Response] = field(default_factory=list)
    follow_up_queue: List[str] = field(default_factory=list)
    detected_patterns: List[CommunicationPattern] = field(default_factory=list)
    mood: EmotionalTone = EmotionalTone.NEUTRAL

    def snapshot(self) -> "ConversationContext":
        """Copy of the context that later writes will not affect."""
        return ConversationContext(
            current_question_index=self.current_question_index,
            responses=list(self.responses),
            follow_up_queue=list(self.follow_up_queue),
            detected_patterns=list(self.detected_patterns),
            mood=self.mood,
        )

    @property
    def response_count(self) -> int:
        return len(self.responses)
