"""
Session events for the interview system.

Each orchestrator owns its own bus; there is no process-wide channel.
"""
import logging
from typing import Dict, Any, List, Callable, Optional
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("events")


class EventType(str, Enum):
    """Types of session events."""
    SESSION_STARTED = "session_started"
    QUESTION_ASKED = "question_asked"
    ANSWER_RECORDED = "answer_recorded"
    FOLLOW_UP_QUEUED = "follow_up_queued"
    TONE_CHANGED = "tone_changed"
    PROFILE_SYNTHESIZED = "profile_synthesized"
    REFINEMENT_FAILED = "refinement_failed"
    SESSION_COMPLETED = "session_completed"


@dataclass
class SessionEvent:
    """Base class for all session events."""
    event_type: EventType
    session_id: str
    timestamp: float
    data: Dict[str, Any]


class SessionStartedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, question_count: int):
        super().__init__(EventType.SESSION_STARTED, session_id, timestamp,
                         {"question_count": question_count})


class QuestionAskedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, question_id: Optional[int],
                 prompt: str, is_follow_up: bool):
        super().__init__(EventType.QUESTION_ASKED, session_id, timestamp, {
            "question_id": question_id,
            "prompt": prompt,
            "is_follow_up": is_follow_up,
        })


class AnswerRecordedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, question_id: int,
                 word_count: int, sentiment: float, response_time: float):
        super().__init__(EventType.ANSWER_RECORDED, session_id, timestamp, {
            "question_id": question_id,
            "word_count": word_count,
            "sentiment": sentiment,
            "response_time": response_time,
        })


class FollowUpQueuedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, question_id: int, follow_up: str):
        super().__init__(EventType.FOLLOW_UP_QUEUED, session_id, timestamp,
                         {"question_id": question_id, "follow_up": follow_up})


class ToneChangedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, previous: str, current: str):
        super().__init__(EventType.TONE_CHANGED, session_id, timestamp,
                         {"previous": previous, "current": current})


class ProfileSynthesizedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, dimensions: Dict[str, float]):
        super().__init__(EventType.PROFILE_SYNTHESIZED, session_id, timestamp,
                         {"dimensions": dimensions})


class RefinementFailedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, error_message: str):
        super().__init__(EventType.REFINEMENT_FAILED, session_id, timestamp,
                         {"error_message": error_message})


class SessionCompletedEvent(SessionEvent):
    def __init__(self, session_id: str, timestamp: float, response_count: int, has_twin: bool):
        super().__init__(EventType.SESSION_COMPLETED, session_id, timestamp,
                         {"response_count": response_count, "has_twin": has_twin})


EventHandler = Callable[[SessionEvent], None]


class InterviewEventBus:
    """Event bus for one interview session."""

    def __init__(self):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """
        Subscribe to a specific event type.

        Args:
            event_type: Type of event to listen for
            handler: Function to call when the event occurs
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed handler to %s", event_type.value)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to every event."""
        self._global_handlers.append(handler)
        logger.debug("Subscribed global handler")

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                logger.warning("Handler not found for %s", event_type.value)

    def emit(self, event: SessionEvent) -> None:
        """
        Deliver an event to its subscribers.

        A failing handler is logged and skipped; it never interrupts the session.
        """
        logger.debug("Emitting event: %s for session %s", event.event_type.value, event.session_id)

        for handler in self._handlers.get(event.event_type, []) + self._global_handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error("Error in event handler for %s: %s", event.event_type.value, e)

    def clear_handlers(self) -> None:
        self._handlers.clear()
        self._global_handlers.clear()


class EventLogger:
    """Logs all events for debugging and analysis."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger("event_logger")
        self.log_level = log_level

    def handle_event(self, event: SessionEvent) -> None:
        self.logger.log(self.log_level, "Event: %s | Session: %s | Data: %s",
                        event.event_type.value, event.session_id, event.data)


class SessionMetrics:
    """Collects counters from session events."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.sessions_started = 0
        self.sessions_completed = 0
        self.questions_asked = 0
        self.follow_ups_asked = 0
        self.answers_recorded = 0
        self.tone_changes = 0
        self.refinement_failures = 0
        self.twins_generated = 0

    def handle_event(self, event: SessionEvent) -> None:
        """Update metrics based on event."""
        if event.event_type == EventType.SESSION_STARTED:
            self.sessions_started += 1
        elif event.event_type == EventType.QUESTION_ASKED:
            if event.data["is_follow_up"]:
                self.follow_ups_asked += 1
            else:
                self.questions_asked += 1
        elif event.event_type == EventType.ANSWER_RECORDED:
            self.answers_recorded += 1
        elif event.event_type == EventType.TONE_CHANGED:
            self.tone_changes += 1
        elif event.event_type == EventType.REFINEMENT_FAILED:
            self.refinement_failures += 1
        elif event.event_type == EventType.SESSION_COMPLETED:
            self.sessions_completed += 1
            if event.data["has_twin"]:
                self.twins_generated += 1

    def get_metrics(self) -> Dict[str, int]:
        """Get current metrics snapshot."""
        return {
            "sessions_started": self.sessions_started,
            "sessions_completed": self.sessions_completed,
            "questions_asked": self.questions_asked,
            "follow_ups_asked": self.follow_ups_asked,
            "answers_recorded": self.answers_recorded,
            "tone_changes": self.tone_changes,
            "refinement_failures": self.refinement_failures,
            "twins_generated": self.twins_generated,
        }
