"""
Digital twin refinement pipeline.

Runs analyze -> generate -> validate against the text-generation service,
reporting progress at fixed checkpoints. Any failure leaves the caller with
the locally synthesized profile.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .schemas import DigitalTwinModel
from .service import TwinModelService
from ..config import (
    PROGRESS_STARTED, PROGRESS_ANALYZED, PROGRESS_GENERATED,
    PROGRESS_VALIDATED, PROGRESS_DONE, VALIDATION_SCENARIOS
)
from ..infrastructure.llm import ModelClientError
from ..interview.models import ConversationContext

logger = logging.getLogger("twin_pipeline")

NO_CREDENTIAL_MESSAGE = "No API credential available; using the local profile"


@dataclass
class RefinementResult:
    """Outcome of one pipeline run. Exactly one of twin and error is set."""
    twin: Optional[DigitalTwinModel] = None
    error: Optional[str] = None
    validation_samples: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.twin is not None


class DigitalTwinPipeline:
    """
    Async three-stage refinement.

    Blocking service calls run in a worker thread.
    """

    def __init__(self,
                 service: Optional[TwinModelService],
                 on_progress: Optional[Callable[[float], None]] = None,
                 scenarios: Optional[List[str]] = None):
        self.service = service
        self.on_progress = on_progress
        self.scenarios = list(scenarios if scenarios is not None else VALIDATION_SCENARIOS)

        self.progress = 0.0
        self.is_generating = False
        self.generated_twin: Optional[DigitalTwinModel] = None
        self.error_message: Optional[str] = None

    @property
    def available(self) -> bool:
        """Whether a credentialed service is attached."""
        return self.service is not None

    def _update_progress(self, value: float, message: str):
        # Within a run progress only moves forward
        if value < self.progress:
            return
        self.progress = value
        logger.info("Twin generation %.0f%%: %s", value * 100, message)
        if self.on_progress:
            self.on_progress(value)

    async def generate(self, context: ConversationContext) -> RefinementResult:
        """
        Run all stages for a finished interview.

        Args:
            context: Snapshot of the completed conversation

        Returns:
            RefinementResult with the twin, or the error that stopped the run
        """
        self.error_message = None
        if self.service is None:
            logger.info(NO_CREDENTIAL_MESSAGE)
            self.error_message = NO_CREDENTIAL_MESSAGE
            return RefinementResult(error=NO_CREDENTIAL_MESSAGE)

        self.is_generating = True
        self.progress = 0.0
        self._update_progress(PROGRESS_STARTED, "Starting")
        responses = list(context.responses)

        try:
            analysis = await asyncio.to_thread(self.service.analyze_personality, responses)
            self._update_progress(PROGRESS_ANALYZED, "Analyzed personality patterns")

            twin = await asyncio.to_thread(self.service.generate_twin, analysis, responses)
            self._update_progress(PROGRESS_GENERATED, "Created digital twin model")

            samples = await self._validate(twin)
            self._update_progress(PROGRESS_VALIDATED, "Validated twin against scenarios")
        except ModelClientError as e:
            self.error_message = f"Failed to generate twin: {e}"
            logger.error(self.error_message)
            return RefinementResult(error=self.error_message)
        finally:
            self.is_generating = False

        self.generated_twin = twin
        self._update_progress(PROGRESS_DONE, "Digital twin ready")
        return RefinementResult(twin=twin, validation_samples=samples)

    async def _validate(self, twin: DigitalTwinModel) -> Dict[str, str]:
        """Simulate the fixed scenarios. Logged only; the twin is returned unchanged."""
        samples: Dict[str, str] = {}
        for scenario in self.scenarios:
            reply = await asyncio.to_thread(self.service.simulate_response, twin, scenario)
            logger.info("Validation scenario: %s", scenario)
            logger.info("Twin response: %s", reply)
            samples[scenario] = reply
        return samples

    async def generate_sample_response(self, prompt: str) -> Optional[str]:
        """Ask the generated twin to answer a prompt. None without a twin or on failure."""
        if self.generated_twin is None or self.service is None:
            return None
        try:
            return await asyncio.to_thread(self.service.simulate_response, self.generated_twin, prompt)
        except ModelClientError as e:
            logger.error("Error generating sample response: %s", e)
            return None
