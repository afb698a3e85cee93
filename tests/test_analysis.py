import pytest

from personatwin.interview import (
    ResponseAnalyzer, TextBlobSentimentAnalyzer, SentimentAnalyzer,
    PunctuationStyle, EmotionalTone, PatternType, QuestionBank
)
from personatwin.interview.testing import make_response, create_test_responses


class UnitScores(SentimentAnalyzer):
    def __init__(self, scores):
        self.scores = scores

    def score_units(self, text):
        return list(self.scores)


def test_scenario_features(analyzer):
    question = QuestionBank().get_question(1)
    first = analyzer.extract("I think therefore this is probably fine, right?", question)
    second = analyzer.extract("Honestly I don't care lol 😂😂", question)

    assert first.word_count == 8
    assert second.word_count == 6
    assert second.emoji_count == 2
    assert first.emoji_count == 0
    assert first.question_id == 1


def test_response_time_is_never_negative(analyzer):
    response = analyzer.extract("ok", QuestionBank().get_question(1), response_time=-3.0)
    assert response.response_time == 0.0


@pytest.mark.parametrize("text,expected", [
    ("Wow! Amazing! Great! Done.", PunctuationStyle.EXPRESSIVE),
    ("Well... hmm... ok", PunctuationStyle.EXPRESSIVE),
    ("This is fine.", PunctuationStyle.FORMAL),
    ("sure thing", PunctuationStyle.MINIMAL),
    ("yes! sure.", PunctuationStyle.CASUAL),
    ("hmm... ok", PunctuationStyle.CASUAL),
])
def test_punctuation_precedence(text, expected):
    assert ResponseAnalyzer.analyze_punctuation(text) == expected


def test_sentiment_averages_units_and_clamps():
    assert ResponseAnalyzer(UnitScores([0.2, 0.4])).analyze_sentiment("x") == pytest.approx(0.3)
    assert ResponseAnalyzer(UnitScores([])).analyze_sentiment("x") == 0.0
    assert ResponseAnalyzer(UnitScores([3.0])).analyze_sentiment("x") == 1.0
    assert ResponseAnalyzer(UnitScores([-2.0, -4.0])).analyze_sentiment("x") == -1.0


def test_textblob_sentiment_direction():
    analyzer = ResponseAnalyzer(TextBlobSentimentAnalyzer())
    assert analyzer.analyze_sentiment("This is a wonderful, great day") > 0
    assert analyzer.analyze_sentiment("This is a terrible, awful day") < 0
    assert analyzer.analyze_sentiment("") == 0.0


def test_count_emojis():
    assert ResponseAnalyzer.count_emojis("🎉🔥 nice") == 2
    assert ResponseAnalyzer.count_emojis("plain text :)") == 0


def test_linguistic_markers():
    markers = ResponseAnalyzer.extract_linguistic_markers("Maybe it's definitely like that haha")
    assert markers["hedge_count"] == 1
    assert markers["assertive_count"] == 1
    assert markers["filler_count"] == 1
    assert markers["capitalized_words"] == 1
    assert markers["laughter_indicators"] == ["haha"]


def test_match_markers():
    question = QuestionBank().get_question(1)
    indicators = [m.indicator for m in ResponseAnalyzer.match_markers("haha honestly", question)]
    assert indicators == ["expressive_laughter", "authentic_sharing"]


def test_detect_patterns_empty(detector):
    assert detector.detect_patterns([]) == []
    assert detector.detect_tone([]) == EmotionalTone.NEUTRAL


def test_detect_patterns_factual_and_questioning(detector):
    responses = create_test_responses(["What? No way", "why not?", "sure"])
    types = [p.pattern_type for p in detector.detect_patterns(responses)]
    assert PatternType.FACTUAL in types
    assert PatternType.QUESTIONING in types
    assert PatternType.STORYTELLER not in types


def test_detect_patterns_storyteller_emotional_confident(detector):
    responses = [
        make_response("I'm telling a long story", word_count=60, sentiment=0.8),
        make_response("my whole week was wild", word_count=70, sentiment=-0.7),
        make_response("I've never seen that", word_count=55, sentiment=0.9),
    ]
    patterns = {p.pattern_type: p for p in detector.detect_patterns(responses)}
    assert patterns[PatternType.STORYTELLER].frequency == 61
    assert patterns[PatternType.EMOTIONAL].frequency == 3
    assert patterns[PatternType.CONFIDENT].frequency == 3
    assert patterns[PatternType.CONFIDENT].examples == ("I'm telling a long story", "my whole week was wild")


def test_detection_is_idempotent(detector):
    responses = create_test_responses(["What? haha 😂", "I'm fine.", "my dog!!! yes!"])
    assert detector.detect_patterns(responses) == detector.detect_patterns(responses)
    assert detector.detect_tone(responses) == detector.detect_tone(responses)


def test_tone_precedence(detector):
    enthusiastic = [make_response("yay", sentiment=0.6, emoji_count=1)]
    assert detector.detect_tone(enthusiastic) == EmotionalTone.ENTHUSIASTIC

    humorous = [
        make_response("lol!!!", sentiment=-0.5, punctuation=PunctuationStyle.EXPRESSIVE),
        make_response("omg!!!", sentiment=-0.5, punctuation=PunctuationStyle.EXPRESSIVE),
    ]
    # Humorous is checked before anxious
    assert detector.detect_tone(humorous) == EmotionalTone.HUMOROUS

    anxious = [make_response("ugh", sentiment=-0.6)]
    assert detector.detect_tone(anxious) == EmotionalTone.ANXIOUS

    contemplative = [make_response("long", word_count=50, sentiment=0.1)]
    assert detector.detect_tone(contemplative) == EmotionalTone.CONTEMPLATIVE

    neutral = [make_response("short", word_count=5, sentiment=0.0)]
    assert detector.detect_tone(neutral) == EmotionalTone.NEUTRAL


def test_positive_without_emoji_is_not_enthusiastic(detector):
    responses = [make_response("great", sentiment=0.9, emoji_count=0)]
    assert detector.detect_tone(responses) == EmotionalTone.NEUTRAL


def test_identify_conversation_style(detector):
    responses = create_test_responses([
        "i went out and i loved it, for example the food",
        "i think you would like it too",
        "i was there, your place felt like home",
    ])
    styles = detector.identify_conversation_style(responses)
    assert "Personal storyteller" in styles
    assert "Engaging conversationalist" in styles
    assert "Uses concrete examples" in styles
    assert "Uses analogies and metaphors" in styles
    assert detector.identify_conversation_style([]) == []
