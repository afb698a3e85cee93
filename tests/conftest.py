import pytest

from personatwin.interview import QuestionBank, ResponseAnalyzer, PatternDetector
from personatwin.interview.testing import FixedSentimentAnalyzer, create_mock_interview_setup
from personatwin.profile import PersonalitySynthesizer


@pytest.fixture
def bank():
    return QuestionBank(active_question_count=10)


@pytest.fixture
def analyzer():
    return ResponseAnalyzer(sentiment_analyzer=FixedSentimentAnalyzer(default=0.0))


@pytest.fixture
def detector():
    return PatternDetector()


@pytest.fixture
def synthesizer():
    return PersonalitySynthesizer()


@pytest.fixture
def local_setup():
    """Orchestrator without a credential: local profile only."""
    return create_mock_interview_setup()
