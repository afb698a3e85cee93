import asyncio

from personatwin.interview import (
    InterviewEventBus, SessionMetrics, EventType,
    SessionStartedEvent, QuestionAskedEvent, SessionCompletedEvent
)
from personatwin.interview.testing import create_mock_interview_setup


def test_failing_handler_does_not_block_others():
    bus = InterviewEventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler bug")

    bus.subscribe(EventType.SESSION_STARTED, broken)
    bus.subscribe(EventType.SESSION_STARTED, received.append)
    bus.emit(SessionStartedEvent("s1", 0.0, 3))

    assert [e.data["question_count"] for e in received] == [3]


def test_typed_and_global_subscriptions():
    bus = InterviewEventBus()
    typed = []
    everything = []
    bus.subscribe(EventType.QUESTION_ASKED, typed.append)
    bus.subscribe_all(everything.append)

    bus.emit(SessionStartedEvent("s1", 0.0, 3))
    bus.emit(QuestionAskedEvent("s1", 1.0, 1, "hi?", False))
    assert len(typed) == 1
    assert len(everything) == 2

    bus.unsubscribe(EventType.QUESTION_ASKED, typed.append)
    bus.emit(QuestionAskedEvent("s1", 2.0, 2, "again?", False))
    assert len(typed) == 1

    bus.clear_handlers()
    bus.emit(SessionStartedEvent("s1", 3.0, 3))
    assert len(everything) == 3


def test_metrics_count_follow_ups_separately():
    metrics = SessionMetrics()
    metrics.handle_event(QuestionAskedEvent("s1", 0.0, 1, "q", False))
    metrics.handle_event(QuestionAskedEvent("s1", 0.0, 1, "follow", True))
    metrics.handle_event(SessionCompletedEvent("s1", 0.0, 2, True))

    assert metrics.get_metrics()["questions_asked"] == 1
    assert metrics.get_metrics()["follow_ups_asked"] == 1
    assert metrics.twins_generated == 1

    metrics.reset()
    assert all(value == 0 for value in metrics.get_metrics().values())


def test_orchestrator_emits_session_lifecycle():
    setup = create_mock_interview_setup(active_question_count=1)
    orchestrator = setup["orchestrator"]
    seen = []
    orchestrator.event_bus.subscribe_all(lambda event: seen.append(event.event_type))

    asyncio.run(orchestrator.start())
    asyncio.run(orchestrator.submit_answer("cats mostly"))

    assert seen == [
        EventType.SESSION_STARTED,
        EventType.QUESTION_ASKED,
        EventType.ANSWER_RECORDED,
        EventType.PROFILE_SYNTHESIZED,
        EventType.SESSION_COMPLETED,
    ]
