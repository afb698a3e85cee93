"""Interview system components.

This module contains the question catalog, per-answer analysis and the
dialogue orchestrator that runs a personality interview.
"""

# Data models
from .models import (
    Question, QuestionCategory, PersonalityDimension, PersonalityMarker,
    Response, PunctuationStyle, EmotionalTone, PatternType,
    CommunicationPattern, ChatMessage, ConversationContext
)

# Question catalog
from .question_bank import QuestionBank, ALL_QUESTIONS

# Analysis
from .analysis import (
    SentimentAnalyzer, TextBlobSentimentAnalyzer, ResponseAnalyzer, PatternDetector
)

# Event system
from .events import (
    InterviewEventBus, EventLogger, SessionMetrics,
    EventType, SessionEvent, SessionStartedEvent, QuestionAskedEvent,
    AnswerRecordedEvent, FollowUpQueuedEvent, ToneChangedEvent,
    ProfileSynthesizedEvent, RefinementFailedEvent, SessionCompletedEvent
)

# Core orchestrator class
from .orchestrator import DialogueOrchestrator, DialogueState, InterviewOutcome

__all__ = [
    # Data models
    "Question", "QuestionCategory", "PersonalityDimension", "PersonalityMarker",
    "Response", "PunctuationStyle", "EmotionalTone", "PatternType",
    "CommunicationPattern", "ChatMessage", "ConversationContext",

    # Question catalog
    "QuestionBank", "ALL_QUESTIONS",

    # Analysis
    "SentimentAnalyzer", "TextBlobSentimentAnalyzer", "ResponseAnalyzer", "PatternDetector",

    # Events
    "InterviewEventBus", "EventLogger", "SessionMetrics",
    "EventType", "SessionEvent", "SessionStartedEvent", "QuestionAskedEvent",
    "AnswerRecordedEvent", "FollowUpQueuedEvent", "ToneChangedEvent",
    "ProfileSynthesizedEvent", "RefinementFailedEvent", "SessionCompletedEvent",

    # Orchestrator
    "DialogueOrchestrator", "DialogueState", "InterviewOutcome"
]
