"""
Request building and document parsing for the three twin stages.
"""
import logging
from typing import List, Optional

from .prompts import TwinPrompts, ANALYSIS_SYSTEM_PROMPT, TWIN_SYSTEM_PROMPT, SIMULATION_SYSTEM_PROMPT
from .schemas import PersonalityAnalysis, DigitalTwinModel, parse_document
from ..config import (
    ANALYSIS_TEMPERATURE, ANALYSIS_MAX_TOKENS,
    TWIN_TEMPERATURE, TWIN_MAX_TOKENS,
    SIMULATION_TEMPERATURE, SIMULATION_MAX_TOKENS
)
from ..infrastructure.llm import ChatClient, ChatRequest, ModelMessage
from ..interview.analysis import ResponseAnalyzer
from ..interview.models import Question, Response

logger = logging.getLogger("twin_service")


class TwinModelService:
    """Blocking service wrapping a ChatClient. Every method may raise ModelClientError."""

    def __init__(self, client: ChatClient, questions: Optional[List[Question]] = None):
        self.client = client
        self.questions = {q.id: q for q in (questions or [])}

    def analyze_personality(self, responses: List[Response]) -> PersonalityAnalysis:
        """
        Stage 1: request a structured personality analysis.

        Args:
            responses: Every recorded answer, follow-up answers included

        Returns:
            Validated PersonalityAnalysis document
        """
        answered = []
        for response in responses:
            question = self.questions.get(response.question_id)
            markers = ResponseAnalyzer.match_markers(response.text, question) if question else []
            answered.append((question, response, markers))

        request = ChatRequest(
            messages=[
                ModelMessage("system", ANALYSIS_SYSTEM_PROMPT),
                ModelMessage("user", TwinPrompts.analysis_prompt(answered)),
            ],
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        logger.info("Requesting personality analysis for %d responses", len(responses))
        return parse_document(self.client.complete_json(request), PersonalityAnalysis)

    def generate_twin(self, analysis: PersonalityAnalysis, responses: List[Response]) -> DigitalTwinModel:
        """Stage 2: turn the analysis and raw answers into a twin document."""
        request = ChatRequest(
            messages=[
                ModelMessage("system", TWIN_SYSTEM_PROMPT),
                ModelMessage("user", TwinPrompts.twin_prompt(TwinPrompts.to_json(analysis), responses)),
            ],
            temperature=TWIN_TEMPERATURE,
            max_tokens=TWIN_MAX_TOKENS,
        )
        logger.info("Requesting digital twin model")
        return parse_document(self.client.complete_json(request), DigitalTwinModel)

    def simulate_response(self, twin: DigitalTwinModel, scenario: str) -> str:
        """Answer a scenario in the twin's voice. Plain text, no JSON mode."""
        prompt = TwinPrompts.simulation_prompt(
            speaking_style=twin.speaking_style,
            vocabulary_patterns=twin.vocabulary_patterns,
            emotional_expression=twin.emotional_expression,
            humor_style=twin.humor_style,
            common_phrases=twin.common_phrases,
            response_patterns=twin.response_patterns,
            scenario=scenario,
        )
        request = ChatRequest(
            messages=[
                ModelMessage("system", SIMULATION_SYSTEM_PROMPT),
                ModelMessage("user", prompt),
            ],
            temperature=SIMULATION_TEMPERATURE,
            max_tokens=SIMULATION_MAX_TOKENS,
        )
        return self.client.complete(request)
