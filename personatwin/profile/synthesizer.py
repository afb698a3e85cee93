"""
Personality synthesis from interview responses.

Every score below is a bounded keyword or ratio heuristic. Profile values
are defined by these exact thresholds.
"""
import logging
import re
from typing import Dict, List, Sequence

import numpy as np

from .models import (
    PersonalityProfile, CommunicationStyle, HumorStyle, HumorType,
    SocialStyle, ThinkingStyle, EmotionalStyle, PersonalitySignature
)
from ..interview.models import (
    ConversationContext, Response, PersonalityDimension as D,
    PunctuationStyle, EmotionalTone
)

logger = logging.getLogger("synthesizer")

NEUTRAL_SCORE = 0.5

ANALYTICAL_WORDS = ["because", "therefore", "analyze", "consider", "think", "reason", "logic", "evidence", "probably"]
EMPATHY_WORDS = ["understand", "feel", "sorry", "happy for", "support", "care", "relate", "imagine"]
ASSERTIVE_WORDS = ["definitely", "absolutely", "must", "should", "need", "will", "won't", "never", "always"]
HUMOR_INDICATORS = ["haha", "lol", "lmao", "funny", "hilarious", "joke", "laugh", "😂", "😆", "🤣"]
DIRECT_CONFLICT_WORDS = ["honestly", "frankly", "straight up", "call it out", "tell them", "confront"]
AVOIDANT_CONFLICT_WORDS = ["whatever", "fine", "i guess", "doesn't matter", "let it go", "avoid"]
GROUP_WORDS = ["everyone", "people", "friends", "group", "team", "together"]
SOLO_WORDS = ["alone", "myself", "solitary", "quiet", "personal"]
DIRECT_WORDS = ["honestly", "actually", "literally", "basically", "simply"]
WARMTH_WORDS = ["thanks", "please", "appreciate", "love", "great", "awesome", "nice"]
THINKING_ANALYTICAL_WORDS = ["analyze", "think", "consider", "because", "reason"]
THINKING_INTUITIVE_WORDS = ["feel", "sense", "gut", "seems", "probably"]
EMOTIONAL_WORDS = ["feel", "felt", "happy", "sad", "angry", "excited", "worried", "love", "hate"]

# Repeated laughter counts toward humor, up to this many hits per response
HUMOR_REPEAT_CAP = 3

STRESS_INDICATORS = [
    "Shorter responses than usual",
    "Less emoji usage",
    "More formal language",
    "Delayed response times",
]


def _clamp(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


def _keyword_pattern(keyword: str, whole_word: bool = True):
    """Match keyword at a word start, and also at a word end when whole_word is set."""
    pattern = r"(?<!\w)" + re.escape(keyword)
    if whole_word:
        pattern += r"(?!\w)"
    return re.compile(pattern)


def _matched_keywords(text: str, keywords: List[str]) -> List[str]:
    """Keywords present in text as whole words, each listed once."""
    lowered = text.lower()
    return [keyword for keyword in keywords if _keyword_pattern(keyword).search(lowered)]


def _keyword_density(responses: Sequence[Response], keywords: List[str], repeat_cap: int = 1) -> float:
    """
    Keyword hits per response, scaled so that a quarter of the list
    showing up in every answer saturates the score.

    Each keyword counts once per response as a whole word. With
    repeat_cap above one, repeated and elongated occurrences ("hahaha")
    count instead, at most repeat_cap per response.
    """
    hits = 0
    for response in responses:
        if repeat_cap > 1:
            lowered = response.text.lower()
            occurrences = sum(len(_keyword_pattern(k, whole_word=False).findall(lowered)) for k in keywords)
            hits += min(repeat_cap, occurrences)
        else:
            hits += len(_matched_keywords(response.text, keywords))
    saturation = len(responses) * len(keywords) / 4
    return _clamp(hits / saturation)


def _keyword_balance(responses: Sequence[Response], toward: List[str], away: List[str]) -> float:
    """Share of `toward` hits among all hits, neutral when nothing matched."""
    toward_hits = 0
    away_hits = 0
    for response in responses:
        toward_hits += len(_matched_keywords(response.text, toward))
        away_hits += len(_matched_keywords(response.text, away))
    if toward_hits + away_hits == 0:
        return NEUTRAL_SCORE
    return _clamp(toward_hits / (toward_hits + away_hits))


def _unique(items: List[str]) -> List[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(items))


class PersonalitySynthesizer:
    """Builds a PersonalityProfile from a conversation context. Pure and deterministic."""

    def synthesize(self, context: ConversationContext) -> PersonalityProfile:
        responses = list(context.responses)
        if not responses:
            logger.info("No responses recorded, returning neutral profile")
            return PersonalityProfile(dimensions={dimension: NEUTRAL_SCORE for dimension in D})

        profile = PersonalityProfile(
            dimensions=self.calculate_dimensions(responses),
            communication_style=self._analyze_communication_style(responses),
            humor_style=self._analyze_humor_style(responses),
            social_style=self._analyze_social_style(responses),
            thinking_style=self._analyze_thinking_style(responses),
            emotional_style=self._analyze_emotional_style(responses),
            typical_responses=self._generate_typical_responses(responses),
            conversation_starters=self._generate_conversation_starters(responses, context.mood),
            comfort_topics=self._identify_comfort_topics(responses),
            avoidance_topics=self._identify_avoidance_topics(responses),
            stress_indicators=list(STRESS_INDICATORS),
            signature=self._extract_signature(responses),
        )
        logger.info(
            "Synthesized profile from %d responses: %s",
            len(responses), {d.value: round(s, 2) for d, s in profile.dimensions.items()}
        )
        return profile

    def calculate_dimensions(self, responses: Sequence[Response]) -> Dict[D, float]:
        """Score all twelve dimensions; an empty list scores 0.5 everywhere."""
        if not responses:
            return {dimension: NEUTRAL_SCORE for dimension in D}

        count = len(responses)
        word_counts = np.array([r.word_count for r in responses], dtype=float)
        sentiments = np.array([r.sentiment_score for r in responses], dtype=float)
        emoji_total = sum(r.emoji_count for r in responses)
        formal_count = sum(1 for r in responses if r.punctuation_style == PunctuationStyle.FORMAL)
        question_count = sum(1 for r in responses if "?" in r.text)

        return {
            D.DETAIL_ORIENTATION: _clamp(word_counts.mean() / 50),
            D.OPTIMISM: _clamp((sentiments.mean() + 1) / 2),
            D.EMOTIONAL_EXPRESSION: _clamp(emoji_total / (count * 2)),
            D.FORMALITY: _clamp(formal_count / count),
            D.OPENNESS: _clamp(question_count / count),
            D.ANALYTICAL_THINKING: _keyword_density(responses, ANALYTICAL_WORDS),
            D.EMPATHY: _keyword_density(responses, EMPATHY_WORDS),
            D.ASSERTIVENESS: _keyword_density(responses, ASSERTIVE_WORDS),
            D.SPONTANEITY: self._spontaneity_score(responses),
            D.HUMOR: _keyword_density(responses, HUMOR_INDICATORS, repeat_cap=HUMOR_REPEAT_CAP),
            D.CONFLICT_STYLE: _keyword_balance(responses, DIRECT_CONFLICT_WORDS, AVOIDANT_CONFLICT_WORDS),
            D.SOCIAL_ENERGY: _keyword_balance(responses, GROUP_WORDS, SOLO_WORDS),
        }

    @staticmethod
    def _spontaneity_score(responses: Sequence[Response]) -> float:
        score = 0.0
        for response in responses:
            if response.response_time < 5:
                score += 0.2
            if response.punctuation_style == PunctuationStyle.EXPRESSIVE:
                score += 0.1
            if response.emoji_count > 0:
                score += 0.1
        return _clamp(score / len(responses))

    def _analyze_communication_style(self, responses: Sequence[Response]) -> CommunicationStyle:
        count = len(responses)
        avg_words = sum(r.word_count for r in responses) / count
        if avg_words < 20:
            pace = "Quick and concise"
        elif avg_words > 50:
            pace = "Detailed and thorough"
        else:
            pace = "Balanced"

        formal_count = sum(1 for r in responses if r.punctuation_style == PunctuationStyle.FORMAL)
        emoji_total = sum(r.emoji_count for r in responses)

        directness = 0.0
        warmth = 0.0
        for response in responses:
            lowered = response.text.lower()
            if any(word in lowered for word in DIRECT_WORDS):
                directness += 0.1
            if any(word in lowered for word in WARMTH_WORDS):
                warmth += 0.15

        examples = [
            r.text[:100] + ("..." if len(r.text) > 100 else "")
            for r in responses[:2]
        ]

        return CommunicationStyle(
            pace=pace,
            formality=_clamp(formal_count / count),
            expressiveness=_clamp(emoji_total / count),
            directness=_clamp(directness),
            warmth=_clamp(warmth),
            detail="Provides context and examples" if avg_words > 40 else "Gets to the point",
            examples=examples,
        )

    def _analyze_humor_style(self, responses: Sequence[Response]) -> HumorStyle:
        # Checked in this order; earlier types win ties
        humor_counts = {
            HumorType.SARCASTIC: 0,
            HumorType.SILLY: 0,
            HumorType.SELF_DEPRECATING: 0,
            HumorType.WITTY: 0,
        }
        examples: List[str] = []

        for response in responses:
            lowered = response.text.lower()
            laughing = "haha" in lowered or "lol" in lowered

            if "sarcas" in lowered or "obviously" in lowered or "clearly" in lowered:
                humor_counts[HumorType.SARCASTIC] += 1
            if laughing or response.emoji_count > 1:
                humor_counts[HumorType.SILLY] += 1
                if laughing:
                    examples.append(response.text[:50])
            if "myself" in lowered and any(w in lowered for w in ("stupid", "dumb", "idiot")):
                humor_counts[HumorType.SELF_DEPRECATING] += 1
            if "witty" in lowered or "clever" in lowered:
                humor_counts[HumorType.WITTY] += 1

        primary_type = HumorType.OBSERVATIONAL
        best = 0
        for humor_type, hits in humor_counts.items():
            if hits > best:
                primary_type, best = humor_type, hits

        frequency = _clamp(sum(humor_counts.values()) / len(responses))
        triggers = ["Casual conversation", "Awkward moments"] if frequency > 0.5 else ["Comfortable settings"]

        return HumorStyle(
            primary_type=primary_type,
            frequency=frequency,
            triggers=triggers,
            examples=examples,
        )

    def _analyze_social_style(self, responses: Sequence[Response]) -> SocialStyle:
        avg_words = sum(r.word_count for r in responses) / len(responses)

        group_score = 0
        solo_score = 0
        for response in responses:
            lowered = response.text.lower()
            group_score += sum(1 for w in GROUP_WORDS if w in lowered)
            solo_score += sum(1 for w in SOLO_WORDS if w in lowered)

        question_count = sum(1 for r in responses if "?" in r.text)

        return SocialStyle(
            energy="Extroverted - enjoys sharing" if avg_words > 30 else "Introverted - selective sharing",
            group_preference="Group activities" if group_score > solo_score else "One-on-one or solo",
            initiation_style="Asks questions" if question_count > 2 else "Shares experiences",
        )

    def _analyze_thinking_style(self, responses: Sequence[Response]) -> ThinkingStyle:
        analytical = 0
        intuitive = 0
        for response in responses:
            lowered = response.text.lower()
            analytical += sum(1 for w in THINKING_ANALYTICAL_WORDS if w in lowered)
            intuitive += sum(1 for w in THINKING_INTUITIVE_WORDS if w in lowered)

        return ThinkingStyle(
            approach="Analytical" if analytical > intuitive else "Intuitive",
            processing="Deliberate" if responses[0].response_time > 10 else "Quick",
            examples=["Considers multiple perspectives", "Uses personal experience as reference"],
        )

    def _analyze_emotional_style(self, responses: Sequence[Response]) -> EmotionalStyle:
        count = len(responses)
        emotional_hits = 0
        for response in responses:
            lowered = response.text.lower()
            emotional_hits += sum(1 for w in EMOTIONAL_WORDS if w in lowered)

        empathy = _clamp(emotional_hits / (count * 3))
        return EmotionalStyle(
            expression="Open and expressive" if emotional_hits > count * 2 else "Reserved",
            empathy_level=empathy,
            vulnerability_comfort=_clamp(empathy * 0.7),
        )

    def _generate_typical_responses(self, responses: Sequence[Response]) -> Dict[str, str]:
        first = responses[0].text.lower()
        return {
            "greeting": "Hey!" if "hey" in first else "Hi there!",
            "agreement": "Totally!" if any("totally" in r.text.lower() for r in responses) else "I agree",
            "disagreement": "I see what you mean, but...",
            "excitement": "That's amazing!! 🎉" if sum(r.emoji_count for r in responses) > 3 else "That's great!",
            "sympathy": "I'm sorry to hear that",
            "confusion": "Hmm, I'm not sure I follow...",
        }

    def _generate_conversation_starters(self, responses: Sequence[Response], mood: EmotionalTone) -> List[str]:
        starters: List[str] = []
        lowered = [r.text.lower() for r in responses]

        if any("show" in t or "movie" in t for t in lowered):
            starters.append("Have you seen anything good lately?")
        if any("work" in t for t in lowered):
            starters.append("How's work been treating you?")

        starters.append("So what's new with you?")
        starters.append("Got any fun plans coming up?")

        if mood == EmotionalTone.HUMOROUS:
            starters.append("Okay, I need your take on something ridiculous...")
        return starters

    def _identify_comfort_topics(self, responses: Sequence[Response]) -> List[str]:
        topics: List[str] = []
        for response in responses:
            lowered = response.text.lower()
            if "work" in lowered or "job" in lowered:
                topics.append("Career")
            if "friend" in lowered:
                topics.append("Friendships")
            if "family" in lowered:
                topics.append("Family")
            if "movie" in lowered or "show" in lowered or "music" in lowered:
                topics.append("Entertainment")
            if "travel" in lowered:
                topics.append("Travel")
        return _unique(topics)

    def _identify_avoidance_topics(self, responses: Sequence[Response]) -> List[str]:
        avoided: List[str] = []
        for response in responses:
            if response.word_count >= 10:
                continue
            lowered = response.text.lower()
            if "politic" in lowered:
                avoided.append("Politics")
            if "personal" in lowered:
                avoided.append("Very personal topics")
        return _unique(avoided)

    def _extract_signature(self, responses: Sequence[Response]) -> PersonalitySignature:
        phrases = set()
        fillers = set()
        laughs = set()

        for response in responses:
            lowered = response.text.lower()
            for phrase in ("honestly", "literally", "totally"):
                if phrase in lowered:
                    phrases.add(phrase)
            if "basically" in lowered:
                fillers.add("basically")
            if "like" in lowered and "i like" not in lowered:
                fillers.add("like")
            for laugh in ("haha", "lol", "😂"):
                if laugh in lowered:
                    laughs.add(laugh)

        if "totally" in phrases:
            agreement = ["Totally!", "Exactly!"]
        else:
            agreement = ["I agree", "That makes sense"]

        return PersonalitySignature(
            unique_phrases=sorted(phrases),
            filler=sorted(fillers),
            greeting_style="Hey!" if "hey" in responses[0].text.lower() else "Hi!",
            signoff_style="Talk soon!",
            laugh_style=sorted(laughs),
            agreement_style=agreement,
            disagreement_style=["I see what you mean, but...", "Hmm, I'm not so sure..."],
        )
