import asyncio
import json

import pytest

from personatwin.infrastructure.llm import ModelClientError, ModelResponseError
from personatwin.interview import ConversationContext, QuestionBank
from personatwin.interview.testing import (
    MockChatClient, mock_pipeline_responses, create_test_responses, MOCK_ANALYSIS, MOCK_TWIN
)
from personatwin.twin import (
    DigitalTwinPipeline, TwinModelService, TwinPrompts, DigitalTwinModel, PersonalityAnalysis, parse_document
)
from personatwin.twin.pipeline import NO_CREDENTIAL_MESSAGE


def make_pipeline(replies, progress=None):
    client = MockChatClient(replies)
    service = TwinModelService(client, QuestionBank(active_question_count=10).all_questions())
    on_progress = progress.append if progress is not None else None
    return DigitalTwinPipeline(service, on_progress=on_progress), client


def context_for(texts):
    return ConversationContext(responses=create_test_responses(texts))


def test_progress_checkpoints_in_order():
    progress = []
    pipeline, client = make_pipeline(mock_pipeline_responses(), progress)
    result = asyncio.run(pipeline.generate(context_for(["haha honestly", "I'd miss them"])))

    assert result.succeeded
    assert result.error is None
    assert progress == [0.1, 0.3, 0.6, 0.8, 1.0]
    assert pipeline.progress == 1.0
    assert not pipeline.is_generating
    assert pipeline.generated_twin is result.twin
    assert len(result.validation_samples) == 3
    assert len(client.request_history) == 5


def test_validation_does_not_change_twin():
    pipeline, _ = make_pipeline(mock_pipeline_responses())
    result = asyncio.run(pipeline.generate(context_for(["lol"])))
    assert result.twin == DigitalTwinModel.model_validate(MOCK_TWIN)
    assert result.validation_samples["A friend tells you they got a promotion"] == "yooo congrats!! 🎉"


def test_failure_in_second_stage_stops_progress():
    progress = []
    pipeline, _ = make_pipeline([json.dumps(MOCK_ANALYSIS), ModelClientError("rate limited")], progress)
    result = asyncio.run(pipeline.generate(context_for(["lol"])))

    assert not result.succeeded
    assert result.error == "Failed to generate twin: rate limited"
    assert pipeline.error_message == result.error
    assert progress == [0.1, 0.3]
    assert pipeline.generated_twin is None
    assert not pipeline.is_generating


def test_schema_mismatch_is_a_failure():
    pipeline, _ = make_pipeline([json.dumps({"speaking_style": {}})])
    result = asyncio.run(pipeline.generate(context_for(["lol"])))
    assert not result.succeeded
    assert "PersonalityAnalysis schema mismatch" in result.error


def test_json_wrapped_in_prose_is_recovered():
    replies = mock_pipeline_responses()
    replies[0] = "Sure! Here you go:\n```json\n" + replies[0] + "\n```"
    pipeline, _ = make_pipeline(replies)
    assert asyncio.run(pipeline.generate(context_for(["lol"]))).succeeded


def test_missing_service_reports_no_credential():
    progress = []
    pipeline = DigitalTwinPipeline(None, on_progress=progress.append)
    result = asyncio.run(pipeline.generate(context_for(["lol"])))

    assert not pipeline.available
    assert result.error == NO_CREDENTIAL_MESSAGE
    assert progress == []
    assert pipeline.progress == 0.0


def test_sample_response_needs_a_twin():
    pipeline, client = make_pipeline(mock_pipeline_responses() + ["nah I'm good"])
    assert asyncio.run(pipeline.generate_sample_response("hi")) is None
    assert client.request_history == []

    asyncio.run(pipeline.generate(context_for(["lol"])))
    assert asyncio.run(pipeline.generate_sample_response("want to hang out?")) == "nah I'm good"
    assert "Scenario: want to hang out?" in client.request_history[-1].messages[1].content


def test_sample_response_failure_returns_none():
    pipeline, _ = make_pipeline(mock_pipeline_responses())
    asyncio.run(pipeline.generate(context_for(["lol"])))
    # Mock replies are exhausted
    assert asyncio.run(pipeline.generate_sample_response("hello")) is None


def test_scores_are_clamped():
    data = json.loads(json.dumps(MOCK_ANALYSIS))
    data["speaking_style"]["formality"] = 1.7
    data["personality_markers"]["creativity"] = -0.4
    data["extra_section"] = {"ignored": True}

    analysis = parse_document(data, PersonalityAnalysis)
    assert analysis.speaking_style.formality == 1.0
    assert analysis.personality_markers.creativity == 0.0


def test_missing_twin_section_rejected():
    data = dict(MOCK_TWIN)
    del data["behavioral_rules"]
    with pytest.raises(ModelResponseError):
        parse_document(data, DigitalTwinModel)


def test_analysis_prompt_includes_features_and_signals():
    question = QuestionBank().get_question(1)
    response = create_test_responses(["haha honestly"])[0]
    prompt = TwinPrompts.analysis_prompt([(question, response, [question.response_patterns["haha"]])])

    assert f"Q1: {question.prompt}" in prompt
    assert "Category: icebreaker" in prompt
    assert "Response: haha honestly" in prompt
    assert "Word Count: 2" in prompt
    assert "Linguistic Markers: hedges 0, assertive 0, fillers 0, capitalized 0, laughter haha" in prompt
    assert "expressive_laughter" in prompt
    assert '"speech_quirks"' in prompt


def test_service_requests_use_stage_settings():
    pipeline, client = make_pipeline(mock_pipeline_responses())
    asyncio.run(pipeline.generate(context_for(["haha honestly"])))

    analysis_request, twin_request, simulation_request = client.request_history[:3]
    assert analysis_request.temperature == 0.7
    assert analysis_request.max_tokens == 2000
    assert "expressive_laughter" in analysis_request.messages[1].content
    assert twin_request.temperature == 0.8
    assert twin_request.max_tokens == 2500
    assert "- haha honestly" in twin_request.messages[1].content
    assert simulation_request.temperature == 0.9
    assert simulation_request.max_tokens == 500
    assert "Speaking Style: Laid-back and quick with a joke." in simulation_request.messages[1].content
