"""
Persona traits from imported chat history.

Works on an already normalized export: lists of user and assistant
messages. Parsing the export files themselves happens elsewhere.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from ..interview.analysis import ResponseAnalyzer

logger = logging.getLogger("persona")

FORMAL_WORDS = ["therefore", "however", "furthermore", "regarding", "pursuant"]
CASUAL_WORDS = ["yeah", "cool", "awesome", "lol", "btw", "gonna"]
QUESTION_WORDS = ["what", "how", "why", "when", "where", "could", "would", "can"]

TECH_KEYWORDS = ["code", "programming", "software", "app", "data", "algorithm", "design", "build", "develop"]
BUSINESS_KEYWORDS = ["startup", "business", "market", "customer", "product", "growth", "revenue"]
CREATIVE_KEYWORDS = ["art", "music", "creative", "design", "story", "write"]
TECH_TERMS = ["API", "UI", "UX", "ML", "AI"]


def extract_topics(messages: List[str]) -> Set[str]:
    """Coarse topic buckets mentioned anywhere in the messages."""
    text = " ".join(messages).lower()
    topics = set()
    if any(k in text for k in TECH_KEYWORDS):
        topics.add("Technology")
    if any(k in text for k in BUSINESS_KEYWORDS):
        topics.add("Business & Startups")
    if any(k in text for k in CREATIVE_KEYWORDS):
        topics.add("Creative Arts")
    return topics


@dataclass
class ConversationData:
    """One imported conversation."""
    user_messages: List[str]
    assistant_messages: List[str] = field(default_factory=list)
    topics: Set[str] = field(default_factory=set)
    message_count: int = 0
    average_message_length: int = 0

    @classmethod
    def from_messages(cls, user_messages: List[str],
                      assistant_messages: Optional[List[str]] = None) -> "ConversationData":
        """Build a record and derive topics and length statistics."""
        user_messages = list(user_messages)
        return cls(
            user_messages=user_messages,
            assistant_messages=list(assistant_messages or []),
            topics=extract_topics(user_messages),
            message_count=len(user_messages),
            average_message_length=sum(len(m) for m in user_messages) // max(len(user_messages), 1),
        )


@dataclass(frozen=True)
class PersonaStyle:
    formality: float  # 0 casual, 1 formal
    analytical_score: float  # 0 emotional, 1 analytical
    verbosity: float  # 0 concise, 1 verbose
    question_frequency: float

    @property
    def description(self) -> str:
        if self.formality > 0.6:
            formality = "Formal"
        elif self.formality > 0.3:
            formality = "Balanced"
        else:
            formality = "Casual"
        if self.analytical_score > 0.6:
            analytical = "Analytical"
        elif self.analytical_score > 0.3:
            analytical = "Balanced"
        else:
            analytical = "Intuitive"
        return f"{formality} & {analytical}"


@dataclass(frozen=True)
class VocabularyProfile:
    common_phrases: List[str] = field(default_factory=list)
    tech_terms_used: bool = False
    emoji_usage: bool = False
    average_word_complexity: float = 0.5


@dataclass(frozen=True)
class PersonaTraits:
    communication_style: PersonaStyle
    interests: List[str] = field(default_factory=list)
    personality_traits: List[str] = field(default_factory=list)
    conversation_patterns: List[str] = field(default_factory=list)
    vocabulary: VocabularyProfile = field(default_factory=VocabularyProfile)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def analyze_communication_style(messages: List[str]) -> PersonaStyle:
    formal_count = 0
    casual_count = 0
    question_count = 0
    total_words = 0
    total_length = 0

    for message in messages:
        words = message.lower().split()
        total_words += len(words)
        total_length += len(message)

        for word in words:
            if any(w in word for w in FORMAL_WORDS):
                formal_count += 1
            if any(w in word for w in CASUAL_WORDS):
                casual_count += 1
            if any(w in word for w in QUESTION_WORDS):
                question_count += 1

        if "?" in message:
            question_count += 2

    count = max(len(messages), 1)
    return PersonaStyle(
        formality=_clamp(formal_count / max(formal_count + casual_count, 1)),
        analytical_score=_clamp(total_length / (count * 100)),
        verbosity=_clamp(total_words / (count * 20)),
        question_frequency=_clamp(question_count / count / 3),
    )


def derive_personality_traits(style: PersonaStyle) -> List[str]:
    traits = []
    if style.analytical_score > 0.6:
        traits.append("Analytical")
    if style.question_frequency > 0.5:
        traits.append("Curious")
    if style.formality < 0.3:
        traits.append("Casual & Approachable")
    if style.verbosity > 0.6:
        traits.append("Detail-Oriented")
    elif style.verbosity < 0.4:
        traits.append("Concise")
    return traits


def identify_conversation_patterns(messages: List[str]) -> List[str]:
    patterns = []
    count = len(messages)

    questions = sum(1 for m in messages if "?" in m)
    if questions / max(count, 1) > 0.3:
        patterns.append("Asks clarifying questions")

    examples = sum(1 for m in messages if "for example" in m.lower() or "like" in m.lower())
    if examples > count // 10:
        patterns.append("Uses examples to explain")

    return patterns


def analyze_vocabulary(messages: List[str]) -> VocabularyProfile:
    text = " ".join(messages)
    return VocabularyProfile(
        tech_terms_used=any(term in text for term in TECH_TERMS),
        emoji_usage=ResponseAnalyzer.count_emojis(text) > 0,
    )


def generate_persona(conversations: List[ConversationData]) -> PersonaTraits:
    """
    Derive persona traits from imported conversations.

    Args:
        conversations: Normalized conversation records

    Returns:
        PersonaTraits; interests are the sorted union of conversation topics
    """
    messages = [m for conversation in conversations for m in conversation.user_messages]
    style = analyze_communication_style(messages)

    interests: Set[str] = set()
    for conversation in conversations:
        interests |= conversation.topics

    persona = PersonaTraits(
        communication_style=style,
        interests=sorted(interests),
        personality_traits=derive_personality_traits(style),
        conversation_patterns=identify_conversation_patterns(messages),
        vocabulary=analyze_vocabulary(messages),
    )
    logger.info(
        "Generated persona from %d conversations (%d messages): %s",
        len(conversations), len(messages), style.description
    )
    return persona
