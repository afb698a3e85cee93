"""
Structured documents returned by the text-generation service.

The top-level sections are required; a document missing one is rejected.
Inside a section every list defaults to empty and every score is clamped
to [0, 1], since models routinely omit or overshoot individual fields.
"""
from typing import Dict, Any, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..infrastructure.llm import ModelResponseError


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


class _Section(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Stage 1: personality analysis
# ---------------------------------------------------------------------------

class SpeakingStyle(_Section):
    pace: str = ""
    formality: float = 0.5
    verbosity: str = ""
    sentence_structure: str = ""
    examples: List[str] = []

    @field_validator("formality")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_unit(value)


class VocabularyPatterns(_Section):
    complexity_level: str = ""
    favorite_words: List[str] = []
    filler_words: List[str] = []
    unique_phrases: List[str] = []
    slang_usage: List[str] = []


class EmotionalExpression(_Section):
    openness: float = 0.5
    intensity: str = ""
    primary_emotions: List[str] = []
    expression_methods: List[str] = []

    @field_validator("openness")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_unit(value)


class HumorAnalysis(_Section):
    type: str = ""
    frequency: float = 0.0
    delivery: str = ""
    examples: List[str] = []

    @field_validator("frequency")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_unit(value)


class ConversationalPatterns(_Section):
    question_asking: str = ""
    storytelling: str = ""
    topic_transitions: str = ""
    engagement_style: str = ""


class PersonalityMarkers(_Section):
    confidence_level: float = 0.5
    empathy_expression: float = 0.5
    analytical_thinking: float = 0.5
    creativity: float = 0.5
    authenticity: float = 0.5

    @field_validator(
        "confidence_level", "empathy_expression", "analytical_thinking",
        "creativity", "authenticity"
    )
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return _clamp_unit(value)


class SpeechQuirks(_Section):
    repetitions: List[str] = []
    emphasis_patterns: List[str] = []
    punctuation_habits: List[str] = []
    response_starters: List[str] = []
    response_endings: List[str] = []


class PersonalityAnalysis(_Section):
    """Detailed speech and personality analysis of the interview answers."""
    speaking_style: SpeakingStyle
    vocabulary_patterns: VocabularyPatterns
    emotional_expression: EmotionalExpression
    humor_style: HumorAnalysis
    conversational_patterns: ConversationalPatterns
    personality_markers: PersonalityMarkers
    speech_quirks: SpeechQuirks


# ---------------------------------------------------------------------------
# Stage 2: digital twin
# ---------------------------------------------------------------------------

class CorePersonality(_Section):
    summary: str = ""
    key_traits: List[str] = []


class SpeakingRules(_Section):
    sentence_starters: List[str] = []
    sentence_endings: List[str] = []
    transition_phrases: List[str] = []
    agreement_phrases: List[str] = []
    disagreement_phrases: List[str] = []
    uncertainty_phrases: List[str] = []


class VocabularyBank(_Section):
    common_words: List[str] = []
    avoid_words: List[str] = []
    substitute_patterns: Dict[str, str] = {}
    emoji_usage: List[str] = []


class ResponseTemplates(_Section):
    greeting: str = ""
    small_talk: str = ""
    storytelling: str = ""
    opinion_sharing: str = ""
    emotional_support: str = ""
    humor: str = ""


class BehavioralRules(_Section):
    enthusiasm_triggers: List[str] = []
    avoidance_topics: List[str] = []
    elaboration_triggers: List[str] = []
    brief_response_triggers: List[str] = []


class AuthenticityMarkers(_Section):
    genuine_reactions: List[str] = []
    nervous_tells: List[str] = []
    excitement_tells: List[str] = []
    thinking_patterns: List[str] = []


class DigitalTwinModel(_Section):
    """Model of a person's voice, precise enough to answer in their place."""
    core_personality: CorePersonality
    speaking_rules: SpeakingRules
    vocabulary_bank: VocabularyBank
    response_templates: ResponseTemplates
    behavioral_rules: BehavioralRules
    authenticity_markers: AuthenticityMarkers

    @property
    def speaking_style(self) -> str:
        return self.core_personality.summary

    @property
    def vocabulary_patterns(self) -> List[str]:
        return self.vocabulary_bank.common_words

    @property
    def emotional_expression(self) -> str:
        return ", ".join(self.authenticity_markers.genuine_reactions)

    @property
    def humor_style(self) -> str:
        return self.response_templates.humor

    @property
    def common_phrases(self) -> List[str]:
        return self.speaking_rules.sentence_starters + self.speaking_rules.transition_phrases

    @property
    def response_patterns(self) -> List[str]:
        templates = self.response_templates
        return [templates.greeting, templates.small_talk, templates.opinion_sharing]


DocumentT = TypeVar("DocumentT", bound=BaseModel)


def parse_document(data: Dict[str, Any], model: Type[DocumentT]) -> DocumentT:
    """
    Validate a decoded JSON object against a document schema.

    Raises:
        ModelResponseError: If the object does not match the schema
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ModelResponseError(f"{model.__name__} schema mismatch: {e.error_count()} error(s): {e}") from e
