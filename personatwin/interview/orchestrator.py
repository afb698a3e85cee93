"""
Dialogue orchestrator: the state machine that runs an interview session.
"""
import asyncio
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from .analysis import ResponseAnalyzer, PatternDetector
from .events import (
    InterviewEventBus, EventLogger, SessionMetrics,
    SessionStartedEvent, QuestionAskedEvent, AnswerRecordedEvent,
    FollowUpQueuedEvent, ToneChangedEvent, ProfileSynthesizedEvent,
    RefinementFailedEvent, SessionCompletedEvent
)
from .models import ChatMessage, ConversationContext, EmotionalTone, Question, QuestionCategory
from .question_bank import QuestionBank
from ..config import (
    ENABLE_TWIN_REFINEMENT, ENABLE_TYPING_DELAY,
    TYPING_SECONDS_PER_CHAR, TYPING_BASE_SECONDS,
    SUB_PROMPT_DELAY, THINKING_DELAY, QUESTION_GAP_DELAY
)
from ..profile import PersonalityProfile, PersonalitySynthesizer
from ..twin.pipeline import DigitalTwinPipeline
from ..twin.schemas import DigitalTwinModel

logger = logging.getLogger("orchestrator")

WELCOME_MESSAGE = (
    "Hey! I'm going to ask you some questions to understand your personality and "
    "communication style. Just be yourself - there are no right or wrong answers. Ready?"
)
CLOSING_MESSAGE = (
    "That's it! Thanks for sharing - I've got a really good sense of your personality now. "
    "Let me process everything..."
)
COMFORTING_MESSAGES = [
    "No pressure at all! Take your time...",
    "You're doing great, by the way!",
    "These are thought-provoking, I know. No rush!",
]
COMFORT_TONES = (EmotionalTone.ANXIOUS, EmotionalTone.CONTEMPLATIVE)

SUGGESTED_REPLIES = {
    QuestionCategory.ICEBREAKER: ["Not much lately", "Actually, something funny happened...", "Let me think..."],
    QuestionCategory.SITUATIONAL: ["I'd probably...", "Honestly, I'd...", "Depends on..."],
    QuestionCategory.HUMOR: ["Obviously the duck", "100 horses for sure", "Is running away an option?"],
    QuestionCategory.PHILOSOPHICAL: ["I've always thought...", "This might be controversial but...", "I believe..."],
}


class DialogueState(str, Enum):
    IDLE = "idle"
    GREETING = "greeting"
    AWAITING_ANSWER = "awaiting_answer"
    PROCESSING = "processing"
    COMPLETE = "complete"


@dataclass
class InterviewOutcome:
    """Final result of a session. The twin supersedes the profile when present."""
    profile: PersonalityProfile
    twin: Optional[DigitalTwinModel] = None
    twin_error: Optional[str] = None
    conversation_styles: List[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.twin is None


class DialogueOrchestrator:
    """
    Drives one interview at a time.

    Asks the active questions in order, gives queued follow-ups priority over
    the next primary question, and on completion synthesizes a profile and
    optionally refines it into a digital twin. Pacing goes through the
    injected sleep; the clock and RNG are injectable too.
    """

    def __init__(self,
                 question_bank: Optional[QuestionBank] = None,
                 analyzer: Optional[ResponseAnalyzer] = None,
                 detector: Optional[PatternDetector] = None,
                 synthesizer: Optional[PersonalitySynthesizer] = None,
                 pipeline: Optional[DigitalTwinPipeline] = None,
                 enable_refinement: bool = ENABLE_TWIN_REFINEMENT,
                 enable_typing_delay: bool = ENABLE_TYPING_DELAY,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
                 clock: Callable[[], float] = time.monotonic,
                 rng: Optional[random.Random] = None,
                 on_complete: Optional[Callable[[InterviewOutcome], None]] = None,
                 on_message: Optional[Callable[[ChatMessage], None]] = None):
        self.question_bank = question_bank or QuestionBank()
        self.analyzer = analyzer or ResponseAnalyzer()
        self.detector = detector or PatternDetector()
        self.synthesizer = synthesizer or PersonalitySynthesizer()
        self.pipeline = pipeline
        self.enable_refinement = enable_refinement
        self.enable_typing_delay = enable_typing_delay
        self._sleep = sleep
        self._clock = clock
        self._rng = rng or random.Random()
        self.on_complete = on_complete
        self.on_message = on_message

        # Initialize event system
        self.event_bus = InterviewEventBus()
        self.event_logger = EventLogger()
        self.metrics = SessionMetrics()
        self.event_bus.subscribe_all(self.event_logger.handle_event)
        self.event_bus.subscribe_all(self.metrics.handle_event)

        self._questions: List[Question] = self.question_bank.active_questions()
        self._reset()

    def _reset(self):
        self.session_id = uuid.uuid4().hex[:12]
        self.context = ConversationContext()
        self.outcome: Optional[InterviewOutcome] = None
        self._transcript: List[ChatMessage] = []
        self._state = DialogueState.IDLE
        self._is_typing = False
        self._current_prompt = ""
        self._current_question: Optional[Question] = None
        self._answering_follow_up = False
        self._prompt_started_at: Optional[float] = None

    # ------------------------------------------------------------------
    # Read-only observers
    # ------------------------------------------------------------------

    @property
    def state(self) -> DialogueState:
        return self._state

    @property
    def transcript(self) -> List[ChatMessage]:
        return list(self._transcript)

    @property
    def is_typing(self) -> bool:
        return self._is_typing

    @property
    def is_complete(self) -> bool:
        return self._state == DialogueState.COMPLETE

    @property
    def current_prompt(self) -> str:
        return self._current_prompt

    @property
    def current_question(self) -> Optional[Question]:
        return self._current_question

    @property
    def progress(self) -> float:
        """Share of active questions posed so far; exactly 1.0 once complete."""
        if self.is_complete:
            return 1.0
        return min(1.0, self.context.current_question_index / len(self._questions))

    def suggested_replies(self) -> List[str]:
        """Short reply starters for the current question's category."""
        if self._current_question is None:
            return []
        return list(SUGGESTED_REPLIES.get(self._current_question.category, []))

    @staticmethod
    def typing_delay(message: str) -> float:
        """Simulated typing time for a bot message."""
        return len(message) * TYPING_SECONDS_PER_CHAR + TYPING_BASE_SECONDS

    # ------------------------------------------------------------------
    # Session control
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Reset state, greet the user and pose the first question."""
        self._reset()
        self._state = DialogueState.GREETING
        logger.info("Starting session %s with %d questions", self.session_id, len(self._questions))
        self.event_bus.emit(SessionStartedEvent(self.session_id, time.time(), len(self._questions)))

        await self._send_bot_message(WELCOME_MESSAGE)
        await self._pause(QUESTION_GAP_DELAY)
        await self._ask_next()

    async def submit_answer(self, text: str) -> bool:
        """
        Process a user answer.

        Args:
            text: Raw answer text

        Returns:
            False when the answer was ignored (empty, whitespace-only, or no
            question is waiting for an answer), True otherwise
        """
        if self._state != DialogueState.AWAITING_ANSWER or not text or not text.strip():
            logger.debug("Ignoring answer in state %s", self._state.value)
            return False

        self._state = DialogueState.PROCESSING
        question = self._current_question
        response_time = self._clock() - self._prompt_started_at if self._prompt_started_at is not None else 0.0

        self._append(ChatMessage(content=text, is_bot=False, timestamp=datetime.now()))

        response = self.analyzer.extract(text, question, response_time)
        self.context.responses.append(response)
        self.event_bus.emit(AnswerRecordedEvent(
            self.session_id, time.time(), question.id,
            response.word_count, response.sentiment_score, response.response_time
        ))

        await self._simulate_thinking()

        self.context.detected_patterns = self.detector.detect_patterns(self.context.responses)
        tone = self.detector.detect_tone(self.context.responses)
        if tone != self.context.mood:
            self.event_bus.emit(ToneChangedEvent(self.session_id, time.time(), self.context.mood.value, tone.value))
            logger.info("Conversation tone: %s -> %s", self.context.mood.value, tone.value)
        self.context.mood = tone

        if tone in COMFORT_TONES and self._rng.randint(0, 2) == 0:
            await self._send_bot_message(self._rng.choice(COMFORTING_MESSAGES), is_sub_prompt=True)

        # Answers to follow-ups never queue further follow-ups
        if not self._answering_follow_up:
            follow_up = self.question_bank.follow_up(text, question)
            if follow_up:
                self.context.follow_up_queue.append(follow_up)
                self.event_bus.emit(FollowUpQueuedEvent(self.session_id, time.time(), question.id, follow_up))

        await self._pause(QUESTION_GAP_DELAY)
        await self._ask_next()
        return True

    async def skip_to_next(self) -> None:
        """Move on without answering the current prompt."""
        if self._state != DialogueState.AWAITING_ANSWER:
            return
        logger.info("Skipping prompt: %s", self._current_prompt)
        await self._ask_next()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _ask_next(self):
        if self.context.follow_up_queue:
            follow_up = self.context.follow_up_queue.pop(0)
            self._answering_follow_up = True
            self.event_bus.emit(QuestionAskedEvent(
                self.session_id, time.time(), self._current_question.id, follow_up, True
            ))
            await self._send_bot_message(follow_up)
            self._await_answer()
            return

        if self.context.current_question_index >= len(self._questions):
            await self._complete()
            return

        question = self._questions[self.context.current_question_index]
        self._current_question = question
        self._answering_follow_up = False
        self.context.current_question_index += 1
        logger.info("Asking question %d (%d/%d)", question.id,
                    self.context.current_question_index, len(self._questions))
        self.event_bus.emit(QuestionAskedEvent(self.session_id, time.time(), question.id, question.prompt, False))

        await self._send_bot_message(question.prompt)
        if question.sub_prompt:
            await self._pause(SUB_PROMPT_DELAY)
            await self._send_bot_message(question.sub_prompt, is_sub_prompt=True)
        self._await_answer()

    def _await_answer(self):
        self._state = DialogueState.AWAITING_ANSWER
        self._prompt_started_at = self._clock()

    async def _complete(self):
        self._state = DialogueState.COMPLETE
        await self._send_bot_message(CLOSING_MESSAGE)

        snapshot = self.context.snapshot()
        profile = self.synthesizer.synthesize(snapshot)
        self.event_bus.emit(ProfileSynthesizedEvent(
            self.session_id, time.time(), {d.value: s for d, s in profile.dimensions.items()}
        ))

        outcome = InterviewOutcome(
            profile=profile,
            conversation_styles=self.detector.identify_conversation_style(snapshot.responses),
        )
        if not self.enable_refinement:
            logger.info("Twin refinement disabled; using local profile")
        elif self.pipeline is None or not self.pipeline.available:
            logger.info("No credential available; using local profile")
        else:
            result = await self.pipeline.generate(snapshot)
            outcome.twin = result.twin
            outcome.twin_error = result.error
            if result.error:
                self.event_bus.emit(RefinementFailedEvent(self.session_id, time.time(), result.error))
                logger.warning("Twin refinement failed, falling back to local profile: %s", result.error)

        self.outcome = outcome
        self.event_bus.emit(SessionCompletedEvent(
            self.session_id, time.time(), len(snapshot.responses), outcome.twin is not None
        ))
        logger.info("Session %s complete: %s", self.session_id, self.metrics.get_metrics())
        if self.on_complete:
            self.on_complete(outcome)

    async def _send_bot_message(self, message: str, is_sub_prompt: bool = False):
        self._is_typing = True
        await self._pause(self.typing_delay(message))
        self._append(ChatMessage(content=message, is_bot=True, timestamp=datetime.now(), is_sub_prompt=is_sub_prompt))
        self._is_typing = False
        self._current_prompt = message

    async def _simulate_thinking(self):
        self._is_typing = True
        await self._pause(THINKING_DELAY)
        self._is_typing = False

    async def _pause(self, seconds: float):
        if self.enable_typing_delay:
            await self._sleep(seconds)

    def _append(self, message: ChatMessage):
        self._transcript.append(message)
        if self.on_message:
            self.on_message(message)
