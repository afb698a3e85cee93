"""Digital twin generation, records and conversation-import personas."""

from .schemas import PersonalityAnalysis, DigitalTwinModel, parse_document
from .prompts import TwinPrompts
from .service import TwinModelService
from .pipeline import DigitalTwinPipeline, RefinementResult
from .records import StoredTwin, CompatibilityScore, calculate_compatibility
from .persona import ConversationData, PersonaTraits, generate_persona

__all__ = [
    "PersonalityAnalysis", "DigitalTwinModel", "parse_document",
    "TwinPrompts", "TwinModelService",
    "DigitalTwinPipeline", "RefinementResult",
    "StoredTwin", "CompatibilityScore", "calculate_compatibility",
    "ConversationData", "PersonaTraits", "generate_persona"
]
