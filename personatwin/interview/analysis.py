"""
Per-answer feature extraction and cross-answer pattern detection.
Turns raw answers into Responses and scans the accumulated responses for
communication habits and an overall emotional tone.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Any

from emoji import EMOJI_DATA
from textblob import TextBlob

from .models import (
    Question, Response, PunctuationStyle, EmotionalTone,
    CommunicationPattern, PatternType, PersonalityMarker
)

logger = logging.getLogger("interview_analysis")

VARIATION_SELECTOR_16 = "\ufe0f"

HEDGE_WORDS = ["maybe", "perhaps", "might", "could", "possibly", "probably", "sort of", "kind of"]
ASSERTIVE_WORDS = ["definitely", "absolutely", "certainly", "obviously", "clearly", "must", "always", "never"]
FILLER_WORDS = ["um", "uh", "like", "you know", "basically", "literally", "actually"]
LAUGHTER_WORDS = ["haha", "lol", "lmao", "hehe"]
FIRST_PERSON_MARKERS = ["i ", "i'm", "i've", "my "]
METAPHOR_WORDS = ["like", "as if", "similar to", "kind of like"]


class SentimentAnalyzer(ABC):
    """Pluggable sentiment facility."""

    @abstractmethod
    def score_units(self, text: str) -> List[float]:
        """
        Score a text.

        Returns:
            One polarity score in [-1, 1] per unit the facility evaluated,
            or an empty list when it produced no signal
        """


class TextBlobSentimentAnalyzer(SentimentAnalyzer):
    """Scores each paragraph with TextBlob's pattern-based polarity."""

    def score_units(self, text: str) -> List[float]:
        paragraphs = [p.strip() for p in text.splitlines() if p.strip()]
        return [float(TextBlob(p).sentiment.polarity) for p in paragraphs]


class ResponseAnalyzer:
    """Converts one raw answer into a Response."""

    def __init__(self,
                 sentiment_analyzer: Optional[SentimentAnalyzer] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.sentiment_analyzer = sentiment_analyzer or TextBlobSentimentAnalyzer()
        self.clock = clock

    def extract(self, text: str, question: Question, response_time: float = 0.0) -> Response:
        """
        Extract features from an answer.

        Args:
            text: Raw answer text
            question: Question being answered
            response_time: Seconds between the prompt and the answer

        Returns:
            Immutable Response record
        """
        response = Response(
            question_id=question.id,
            text=text,
            response_time=max(0.0, response_time),
            word_count=len(text.split()),
            sentiment_score=self.analyze_sentiment(text),
            emoji_count=self.count_emojis(text),
            punctuation_style=self.analyze_punctuation(text),
            timestamp=self.clock(),
        )
        logger.debug(
            "Extracted response for question %d: words=%d sentiment=%.2f emojis=%d punctuation=%s",
            question.id, response.word_count, response.sentiment_score,
            response.emoji_count, response.punctuation_style.value
        )
        return response

    def analyze_sentiment(self, text: str) -> float:
        """Average the facility's unit scores, 0.0 when it reports nothing."""
        scores = self.sentiment_analyzer.score_units(text)
        if not scores:
            return 0.0
        average = sum(scores) / len(scores)
        return max(-1.0, min(1.0, average))

    @staticmethod
    def count_emojis(text: str) -> int:
        """Count characters that render as emoji by default."""
        # Text-presentation symbols (©, ☺) only become emoji with VS16,
        # so they appear in EMOJI_DATA with the selector appended.
        return sum(
            1 for ch in text
            if ch in EMOJI_DATA and ch + VARIATION_SELECTOR_16 not in EMOJI_DATA
        )

    @staticmethod
    def analyze_punctuation(text: str) -> PunctuationStyle:
        """Classify punctuation habits. The first matching rule wins."""
        exclamation_count = text.count("!")
        ellipsis_count = text.count("...")
        period_count = text.count(".")

        if exclamation_count > 2 or ellipsis_count > 1:
            return PunctuationStyle.EXPRESSIVE
        if period_count > 0 and exclamation_count == 0 and ellipsis_count == 0:
            return PunctuationStyle.FORMAL
        if exclamation_count == 0 and period_count == 0:
            return PunctuationStyle.MINIMAL
        return PunctuationStyle.CASUAL

    @staticmethod
    def extract_linguistic_markers(text: str) -> Dict[str, Any]:
        """Count hedges, assertive words, fillers and laughter in one answer."""
        lowered = text.lower()
        return {
            "hedge_count": sum(1 for w in HEDGE_WORDS if w in lowered),
            "assertive_count": sum(1 for w in ASSERTIVE_WORDS if w in lowered),
            "filler_count": sum(1 for w in FILLER_WORDS if w in lowered),
            "capitalized_words": sum(
                1 for token in text.split(" ") if len(token) > 1 and token[0].isupper()
            ),
            "laughter_indicators": [w for w in LAUGHTER_WORDS if w in lowered],
        }

    @staticmethod
    def match_markers(text: str, question: Question) -> List[PersonalityMarker]:
        """Personality markers of the question whose keyword appears in the answer."""
        lowered = text.lower()
        return [marker for keyword, marker in question.response_patterns.items() if keyword in lowered]


class PatternDetector:
    """
    Stateless detector for patterns and tone.

    Every call re-derives its result from the full response list, so calling
    it twice with the same list gives the same answer.
    """

    def detect_patterns(self, responses: List[Response]) -> List[CommunicationPattern]:
        if not responses:
            return []

        patterns: List[CommunicationPattern] = []
        count = len(responses)

        def examples(subset: List[Response]) -> tuple:
            return tuple(r.text for r in subset[:2])

        avg_word_count = sum(r.word_count for r in responses) / count
        if avg_word_count > 50:
            patterns.append(CommunicationPattern(
                PatternType.STORYTELLER, int(avg_word_count), examples(responses)
            ))
        elif avg_word_count < 20:
            patterns.append(CommunicationPattern(
                PatternType.FACTUAL, int(avg_word_count), examples(responses)
            ))

        emotional = [r for r in responses if abs(r.sentiment_score) > 0.5]
        if len(emotional) > count / 2:
            patterns.append(CommunicationPattern(
                PatternType.EMOTIONAL, len(emotional), examples(emotional)
            ))

        questioning = [r for r in responses if "?" in r.text]
        if len(questioning) > count / 3:
            patterns.append(CommunicationPattern(
                PatternType.QUESTIONING, len(questioning), examples(questioning)
            ))

        self_referencing = [
            r for r in responses
            if any(marker in r.text.lower() for marker in FIRST_PERSON_MARKERS)
        ]
        if len(self_referencing) > count * 2 / 3:
            patterns.append(CommunicationPattern(
                PatternType.CONFIDENT, len(self_referencing), examples(self_referencing)
            ))

        return patterns

    def detect_tone(self, responses: List[Response]) -> EmotionalTone:
        """Overall emotional tone; rules are checked in order and the first match wins."""
        if not responses:
            return EmotionalTone.NEUTRAL

        count = len(responses)
        avg_sentiment = sum(r.sentiment_score for r in responses) / count
        total_emojis = sum(r.emoji_count for r in responses)
        expressive = sum(1 for r in responses if r.punctuation_style == PunctuationStyle.EXPRESSIVE)

        if avg_sentiment > 0.3 and total_emojis > 0:
            return EmotionalTone.ENTHUSIASTIC
        if expressive > count / 2:
            return EmotionalTone.HUMOROUS
        if avg_sentiment < -0.2:
            return EmotionalTone.ANXIOUS
        if -0.1 <= avg_sentiment <= 0.1:
            long_responses = sum(1 for r in responses if r.word_count > 40)
            if long_responses > count / 2:
                return EmotionalTone.CONTEMPLATIVE
        return EmotionalTone.NEUTRAL

    @staticmethod
    def identify_conversation_style(responses: List[Response]) -> List[str]:
        """Describe broad conversational habits in plain labels."""
        styles: List[str] = []
        count = len(responses)
        if not count:
            return styles

        lowered = [r.text.lower() for r in responses]

        first_person = sum(1 for t in lowered if " i " in t or t.startswith("i "))
        second_person = sum(1 for t in lowered if " you " in t or "your " in t)
        if first_person > count * 2 / 3:
            styles.append("Personal storyteller")
        if second_person > count / 3:
            styles.append("Engaging conversationalist")

        if any("for example" in t or "like when" in t for t in lowered):
            styles.append("Uses concrete examples")

        metaphors = sum(1 for t in lowered if any(w in t for w in METAPHOR_WORDS))
        if metaphors > 1:
            styles.append("Uses analogies and metaphors")

        return styles
