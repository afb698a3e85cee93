"""
Prompt templates for the digital twin stages.

Kept apart from the service so the wording can be edited without touching
request handling.
"""
import json
from typing import List, Optional, Tuple

from ..interview.analysis import ResponseAnalyzer
from ..interview.models import Question, Response, PersonalityMarker


ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert psycholinguist and personality analyst. Analyze the user's responses "
    "to create a detailed personality profile that captures not just what they say, but HOW "
    "they would say things. Focus on speech patterns, vocabulary choices, humor style, and "
    "conversational quirks."
)

TWIN_SYSTEM_PROMPT = (
    "You are creating a digital twin that can mimic someone's exact communication style. "
    "Based on the personality analysis and actual responses provided, create a comprehensive "
    "model that can generate responses exactly as this person would - including their specific "
    "phrases, humor, emotional expressions, and quirks."
)

SIMULATION_SYSTEM_PROMPT = (
    "You must respond EXACTLY as the person described would. Use their specific vocabulary, "
    "speech patterns, humor, and emotional expression. Do not break character."
)

ANALYSIS_SCHEMA = """
{
    "speaking_style": {
        "pace": "fast/moderate/slow",
        "formality": 0.0-1.0,
        "verbosity": "concise/balanced/elaborate",
        "sentence_structure": "simple/varied/complex",
        "examples": ["actual example sentences from their responses"]
    },
    "vocabulary_patterns": {
        "complexity_level": "basic/intermediate/advanced",
        "favorite_words": ["words they use frequently"],
        "filler_words": ["um", "like", "you know", etc.],
        "unique_phrases": ["phrases specific to them"],
        "slang_usage": ["any slang or colloquialisms"]
    },
    "emotional_expression": {
        "openness": 0.0-1.0,
        "intensity": "subdued/moderate/intense",
        "primary_emotions": ["emotions they express most"],
        "expression_methods": ["how they show emotions - emojis, words, punctuation"]
    },
    "humor_style": {
        "type": "dry/sarcastic/silly/witty/observational/self-deprecating",
        "frequency": 0.0-1.0,
        "delivery": "subtle/obvious/mixed",
        "examples": ["actual humorous responses"]
    },
    "conversational_patterns": {
        "question_asking": "frequent/occasional/rare",
        "storytelling": "detailed/brief/avoids",
        "topic_transitions": "smooth/abrupt/follows_others",
        "engagement_style": "initiates/responds/balanced"
    },
    "personality_markers": {
        "confidence_level": 0.0-1.0,
        "empathy_expression": 0.0-1.0,
        "analytical_thinking": 0.0-1.0,
        "creativity": 0.0-1.0,
        "authenticity": 0.0-1.0
    },
    "speech_quirks": {
        "repetitions": ["phrases they repeat"],
        "emphasis_patterns": ["how they emphasize - CAPS, repetition, etc."],
        "punctuation_habits": ["...", "!!!", "?!?", etc.],
        "response_starters": ["how they typically start responses"],
        "response_endings": ["how they typically end responses"]
    }
}
"""

TWIN_SCHEMA = """
{
    "core_personality": {
        "summary": "2-3 sentence description of their personality",
        "key_traits": ["trait1", "trait2", "trait3"]
    },
    "speaking_rules": {
        "sentence_starters": ["typical ways they start sentences"],
        "sentence_endings": ["typical ways they end sentences"],
        "transition_phrases": ["how they connect thoughts"],
        "agreement_phrases": ["how they agree with someone"],
        "disagreement_phrases": ["how they disagree with someone"],
        "uncertainty_phrases": ["how they express uncertainty"]
    },
    "vocabulary_bank": {
        "common_words": ["frequently used words"],
        "avoid_words": ["words they never use"],
        "substitute_patterns": {"formal_word": "their_casual_version"},
        "emoji_usage": ["emojis they use and when"]
    },
    "response_templates": {
        "greeting": "how they greet people",
        "small_talk": "how they do small talk",
        "storytelling": "how they tell stories",
        "opinion_sharing": "how they share opinions",
        "emotional_support": "how they provide support",
        "humor": "how they make jokes"
    },
    "behavioral_rules": {
        "enthusiasm_triggers": ["what makes them excited"],
        "avoidance_topics": ["what they avoid discussing"],
        "elaboration_triggers": ["when they give long responses"],
        "brief_response_triggers": ["when they give short responses"]
    },
    "authenticity_markers": {
        "genuine_reactions": ["their authentic responses"],
        "nervous_tells": ["how they act when uncomfortable"],
        "excitement_tells": ["how they show genuine excitement"],
        "thinking_patterns": ["how they process information"]
    }
}
"""


class TwinPrompts:
    """Collection of the twin generation prompts."""

    @staticmethod
    def describe_linguistic_markers(text: str) -> str:
        markers = ResponseAnalyzer.extract_linguistic_markers(text)
        laughter = ", ".join(markers["laughter_indicators"]) or "none"
        return (f"hedges {markers['hedge_count']}, assertive {markers['assertive_count']}, "
                f"fillers {markers['filler_count']}, capitalized {markers['capitalized_words']}, "
                f"laughter {laughter}")

    @staticmethod
    def analysis_prompt(answered: List[Tuple[Optional[Question], Response, List[PersonalityMarker]]]) -> str:
        """
        Stage 1 prompt: raw answers with their features and question context.

        Args:
            answered: (question, response, matched markers) triples in answer order;
                the question is None when it is no longer in the bank
        """
        lines = ["Analyze these conversation responses to build a detailed personality profile:", ""]
        for index, (question, response, markers) in enumerate(answered, start=1):
            lines.append(f"Q{index}: {question.prompt if question else '(follow-up)'}")
            if question is not None:
                lines.append(f"Category: {question.category.value}")
            lines.append(f"Response: {response.text}")
            lines.append(f"Response Time: {response.response_time:.1f} seconds")
            lines.append(f"Word Count: {response.word_count}")
            lines.append(f"Punctuation Style: {response.punctuation_style.value}")
            lines.append(f"Emoji Count: {response.emoji_count}")
            lines.append(f"Linguistic Markers: {TwinPrompts.describe_linguistic_markers(response.text)}")
            if markers:
                signals = ", ".join(f"{m.indicator} ({m.dimension.value} {m.weight:+.1f})" for m in markers)
                lines.append(f"Detected Signals: {signals}")
            lines.append("")

        lines.append("Create a detailed JSON analysis with the following structure:")
        return "\n".join(lines) + ANALYSIS_SCHEMA

    @staticmethod
    def twin_prompt(analysis_json: str, responses: List[Response]) -> str:
        """Stage 2 prompt: the analysis document plus the raw answers."""
        samples = "\n".join(f"- {r.text}" for r in responses)
        return f"""
Based on this personality analysis, create a digital twin model that can perfectly mimic this person's communication style.

Analysis: {analysis_json}

Sample Responses for Reference:
{samples}

Generate a comprehensive digital twin model in JSON format:
{TWIN_SCHEMA}
        """.strip()

    @staticmethod
    def simulation_prompt(speaking_style: str,
                          vocabulary_patterns: List[str],
                          emotional_expression: str,
                          humor_style: str,
                          common_phrases: List[str],
                          response_patterns: List[str],
                          scenario: str) -> str:
        """Stage 3 prompt: answer one scenario in the twin's voice."""
        return f"""
You are a digital twin with the following personality profile:

Speaking Style: {speaking_style}
Vocabulary Patterns: {", ".join(vocabulary_patterns)}
Emotional Expression: {emotional_expression}
Humor Style: {humor_style}
Common Phrases: {", ".join(common_phrases)}
Response Patterns: {"; ".join(response_patterns)}

Respond to this scenario EXACTLY as this person would, using their speech patterns, vocabulary, and mannerisms:

Scenario: {scenario}
        """.strip()

    @staticmethod
    def to_json(document) -> str:
        """Compact JSON for embedding a pydantic document in a prompt."""
        return json.dumps(document.model_dump(), ensure_ascii=False)
