"""
personatwin: conversational personality interviews and digital twins.

Runs a short guided interview, infers a personality profile from how the
answers are written, and optionally refines it into a digital twin with an
external text-generation model.
"""

__version__ = "1.0.0"

# Main entry points
from .interview.orchestrator import DialogueOrchestrator, InterviewOutcome
from .profile import PersonalityProfile

__all__ = ["DialogueOrchestrator", "InterviewOutcome", "PersonalityProfile"]
