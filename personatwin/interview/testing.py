"""
Testing infrastructure with mock collaborators for the interview system.
"""
import json
import random
from datetime import datetime
from typing import Dict, Any, List, Optional, Union

from .analysis import ResponseAnalyzer, SentimentAnalyzer
from .models import Question, QuestionCategory, Response, PunctuationStyle
from .orchestrator import DialogueOrchestrator
from .question_bank import QuestionBank
from ..infrastructure.llm import ChatClient, ChatRequest, ModelClientError
from ..profile import PersonalityProfile
from ..twin.pipeline import DigitalTwinPipeline
from ..twin.service import TwinModelService


MOCK_ANALYSIS = {
    "speaking_style": {
        "pace": "fast",
        "formality": 0.2,
        "verbosity": "concise",
        "sentence_structure": "simple",
        "examples": ["Honestly I don't care lol"],
    },
    "vocabulary_patterns": {
        "complexity_level": "basic",
        "favorite_words": ["honestly"],
        "filler_words": ["like"],
        "unique_phrases": [],
        "slang_usage": ["lol"],
    },
    "emotional_expression": {
        "openness": 0.6,
        "intensity": "moderate",
        "primary_emotions": ["amusement"],
        "expression_methods": ["emojis"],
    },
    "humor_style": {"type": "silly", "frequency": 0.7, "delivery": "obvious", "examples": []},
    "conversational_patterns": {
        "question_asking": "occasional",
        "storytelling": "brief",
        "topic_transitions": "abrupt",
        "engagement_style": "responds",
    },
    "personality_markers": {
        "confidence_level": 0.7,
        "empathy_expression": 0.5,
        "analytical_thinking": 0.4,
        "creativity": 0.6,
        "authenticity": 0.9,
    },
    "speech_quirks": {
        "repetitions": [],
        "emphasis_patterns": ["emoji"],
        "punctuation_habits": [],
        "response_starters": ["Honestly"],
        "response_endings": ["lol"],
    },
}

MOCK_TWIN = {
    "core_personality": {
        "summary": "Laid-back and quick with a joke.",
        "key_traits": ["casual", "funny", "direct"],
    },
    "speaking_rules": {
        "sentence_starters": ["Honestly"],
        "sentence_endings": ["lol"],
        "transition_phrases": ["anyway"],
        "agreement_phrases": ["for sure"],
        "disagreement_phrases": ["nah"],
        "uncertainty_phrases": ["idk"],
    },
    "vocabulary_bank": {
        "common_words": ["honestly", "lol"],
        "avoid_words": ["furthermore"],
        "substitute_patterns": {"yes": "yeah"},
        "emoji_usage": ["😂 when amused"],
    },
    "response_templates": {
        "greeting": "heyy",
        "small_talk": "not much, you?",
        "storytelling": "ok so basically",
        "opinion_sharing": "honestly I think",
        "emotional_support": "that sucks, I'm here",
        "humor": "lol classic",
    },
    "behavioral_rules": {
        "enthusiasm_triggers": ["memes"],
        "avoidance_topics": ["politics"],
        "elaboration_triggers": [],
        "brief_response_triggers": ["small talk"],
    },
    "authenticity_markers": {
        "genuine_reactions": ["lol"],
        "nervous_tells": ["haha"],
        "excitement_tells": ["!!"],
        "thinking_patterns": ["gut feeling"],
    },
}


class MockChatClient(ChatClient):
    """
    Mock model client for testing.

    Replies are consumed in order. An Exception instance in the list is
    raised instead of returned.
    """

    def __init__(self, mock_responses: List[Union[str, Exception]]):
        self.mock_responses = list(mock_responses)
        self.current_response_idx = 0
        self.request_history: List[ChatRequest] = []

    def complete(self, request: ChatRequest) -> str:
        self.request_history.append(request)
        if self.current_response_idx >= len(self.mock_responses):
            raise ModelClientError("No more mock responses")

        response = self.mock_responses[self.current_response_idx]
        self.current_response_idx += 1
        if isinstance(response, Exception):
            raise response
        return response


class FixedSentimentAnalyzer(SentimentAnalyzer):
    """Returns preset scores keyed by text; unknown text scores neutral."""

    def __init__(self, scores: Optional[Dict[str, float]] = None, default: Optional[float] = None):
        self.scores = scores or {}
        self.default = default

    def score_units(self, text: str) -> List[float]:
        if text in self.scores:
            return [self.scores[text]]
        return [] if self.default is None else [self.default]


class RecordingSleep:
    """Async sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class SteppingClock:
    """Monotonic clock that advances a fixed step on every read."""

    def __init__(self, step: float = 1.0, start: float = 0.0):
        self.step = step
        self.now = start

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


def mock_pipeline_responses() -> List[str]:
    """Analysis, twin and three validation replies for a successful run."""
    return [
        json.dumps(MOCK_ANALYSIS),
        json.dumps(MOCK_TWIN),
        "heyy probably just chilling lol",
        "yooo congrats!! 🎉",
        "honestly I think it depends",
    ]


def create_mock_interview_setup(llm_responses: Optional[List[Union[str, Exception]]] = None,
                                active_question_count: int = 3,
                                sentiment: Optional[Dict[str, float]] = None,
                                seed: int = 1) -> Dict[str, Any]:
    """
    Create an orchestrator wired to mock collaborators.

    Passing llm_responses attaches a refinement pipeline backed by a
    MockChatClient; leaving it None models a missing credential.
    """
    bank = QuestionBank(active_question_count=active_question_count)
    sleep = RecordingSleep()
    analyzer = ResponseAnalyzer(sentiment_analyzer=FixedSentimentAnalyzer(sentiment, default=0.0))

    llm_client = None
    pipeline = None
    if llm_responses is not None:
        llm_client = MockChatClient(llm_responses)
        pipeline = DigitalTwinPipeline(TwinModelService(llm_client, bank.all_questions()))

    outcomes = []
    orchestrator = DialogueOrchestrator(
        question_bank=bank,
        analyzer=analyzer,
        pipeline=pipeline,
        enable_refinement=True,
        sleep=sleep,
        clock=SteppingClock(),
        rng=random.Random(seed),
        on_complete=outcomes.append,
    )

    return {
        "orchestrator": orchestrator,
        "question_bank": bank,
        "sleep": sleep,
        "llm_client": llm_client,
        "pipeline": pipeline,
        "outcomes": outcomes,
    }


def create_test_responses(texts: List[str], question_id: int = 1,
                          response_time: float = 0.0) -> List[Response]:
    """Build Responses through the real extractor with neutral sentiment."""
    analyzer = ResponseAnalyzer(
        sentiment_analyzer=FixedSentimentAnalyzer(default=0.0),
        clock=lambda: datetime(2024, 1, 1),
    )
    question = Question(id=question_id, category=QuestionCategory.ICEBREAKER, prompt="Test question")
    return [analyzer.extract(text, question, response_time) for text in texts]


def make_response(text: str, question_id: int = 1, word_count: Optional[int] = None,
                  sentiment: float = 0.0, emoji_count: int = 0,
                  punctuation: PunctuationStyle = PunctuationStyle.CASUAL,
                  response_time: float = 10.0) -> Response:
    """Build a Response with explicit features, bypassing extraction."""
    return Response(
        question_id=question_id,
        text=text,
        response_time=response_time,
        word_count=len(text.split()) if word_count is None else word_count,
        sentiment_score=sentiment,
        emoji_count=emoji_count,
        punctuation_style=punctuation,
        timestamp=datetime(2024, 1, 1),
    )


class ProfileChecks:
    """Helper for validating synthesized profiles."""

    @staticmethod
    def validate_profile(profile: PersonalityProfile) -> List[str]:
        """
        Validate a profile and return the issues found.

        Returns:
            List of validation error messages (empty if valid)
        """
        issues = []
        if len(profile.dimensions) != 12:
            issues.append(f"Expected 12 dimensions, got {len(profile.dimensions)}")
        for dimension, score in profile.dimensions.items():
            if not (0.0 <= score <= 1.0):
                issues.append(f"{dimension.value} out of range: {score}")
        for name in ("formality", "expressiveness", "directness", "warmth"):
            value = getattr(profile.communication_style, name)
            if not (0.0 <= value <= 1.0):
                issues.append(f"communication_style.{name} out of range: {value}")
        if not (0.0 <= profile.humor_style.frequency <= 1.0):
            issues.append(f"humor frequency out of range: {profile.humor_style.frequency}")
        return issues

    @staticmethod
    def assert_valid_profile(profile: PersonalityProfile) -> None:
        issues = ProfileChecks.validate_profile(profile)
        if issues:
            raise AssertionError(f"Invalid profile: {'; '.join(issues)}")
