"""
Personatwin Configuration System
================================

This file contains ALL configuration for the personatwin interview system.
- User settings at the top (things users might want to change)
- Internal constants at the bottom (technical defaults)
"""
import os
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# USER SETTINGS - Edit these to customize the interview
# =============================================================================

# Interview settings
# Number of questions taken from the front of the question bank.
# Lower it to shorten sessions while testing.
ACTIVE_QUESTION_COUNT = 3

# Digital twin refinement
ENABLE_TWIN_REFINEMENT = True
MODEL_PROVIDER = "openai"  # Options: openai, vertex
OPENAI_API_KEY_FILE = None  # Optional: path to a file holding the API key

# Vertex backend (only used when MODEL_PROVIDER = "vertex")
GOOGLE_CLOUD_PROJECT = None
GOOGLE_APPLICATION_CREDENTIALS = None  # Optional: path to credentials JSON

# Pacing
ENABLE_TYPING_DELAY = True

# Logging
LOG_FILE = "./_interview/interview.log"
LOG_LEVEL = "DEBUG"


# =============================================================================
# INTERNAL CONSTANTS - Don't change these unless you know what you're doing
# =============================================================================

# Typing simulation (seconds)
TYPING_SECONDS_PER_CHAR = 0.02
TYPING_BASE_SECONDS = 0.5
SUB_PROMPT_DELAY = 0.5
THINKING_DELAY = 0.8
QUESTION_GAP_DELAY = 1.5

# OpenAI-compatible chat completions
OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL_NAME = "gpt-4-turbo-preview"
API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 20

# Vertex
VERTEX_LOCATION = "us-central1"
VERTEX_MODEL_NAME = "gemini-2.5-flash-lite"

# LLM
LLM_TIMEOUT = 60
ANALYSIS_TEMPERATURE = 0.7
ANALYSIS_MAX_TOKENS = 2000
TWIN_TEMPERATURE = 0.8
TWIN_MAX_TOKENS = 2500
SIMULATION_TEMPERATURE = 0.9
SIMULATION_MAX_TOKENS = 500

# Refinement progress checkpoints
PROGRESS_STARTED = 0.1
PROGRESS_ANALYZED = 0.3
PROGRESS_GENERATED = 0.6
PROGRESS_VALIDATED = 0.8
PROGRESS_DONE = 1.0

# Scenarios used to exercise a freshly generated twin
VALIDATION_SCENARIOS = [
    "Someone asks you about your weekend plans",
    "A friend tells you they got a promotion",
    "You're asked your opinion on a controversial topic",
]


# =============================================================================
# MAIN CONFIG OBJECT
# =============================================================================

@dataclass
class Config:
    """Main configuration object."""
    active_question_count: int = ACTIVE_QUESTION_COUNT
    enable_twin_refinement: bool = ENABLE_TWIN_REFINEMENT
    model_provider: str = MODEL_PROVIDER
    openai_api_url: str = OPENAI_API_URL
    openai_model_name: str = OPENAI_MODEL_NAME
    openai_api_key_file: Optional[str] = OPENAI_API_KEY_FILE
    google_cloud_project: Optional[str] = GOOGLE_CLOUD_PROJECT
    google_application_credentials: Optional[str] = GOOGLE_APPLICATION_CREDENTIALS
    vertex_location: str = VERTEX_LOCATION
    vertex_model_name: str = VERTEX_MODEL_NAME
    llm_timeout: int = LLM_TIMEOUT
    enable_typing_delay: bool = ENABLE_TYPING_DELAY
    log_file: str = LOG_FILE
    log_level: str = LOG_LEVEL


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Config:
    """
    Load configuration, letting environment variables override the settings above.

    Raises:
        ValueError: If a numeric override is not a number or the provider is unknown
    """
    count_override = os.getenv("PERSONATWIN_ACTIVE_QUESTIONS")
    if count_override is not None:
        try:
            active_question_count = int(count_override)
        except ValueError:
            raise ValueError(
                f"PERSONATWIN_ACTIVE_QUESTIONS must be an integer, got {count_override!r}"
            )
    else:
        active_question_count = ACTIVE_QUESTION_COUNT

    provider = (os.getenv("PERSONATWIN_MODEL_PROVIDER") or MODEL_PROVIDER).strip().lower()
    if provider not in ("openai", "vertex"):
        raise ValueError(f"Unknown model provider: {provider!r} (use openai or vertex)")

    return Config(
        active_question_count=active_question_count,
        enable_twin_refinement=_env_flag("PERSONATWIN_REFINE", ENABLE_TWIN_REFINEMENT),
        model_provider=provider,
        openai_model_name=os.getenv("PERSONATWIN_MODEL") or OPENAI_MODEL_NAME,
        openai_api_key_file=os.getenv("PERSONATWIN_API_KEY_FILE") or OPENAI_API_KEY_FILE,
        google_cloud_project=os.getenv("GOOGLE_CLOUD_PROJECT") or GOOGLE_CLOUD_PROJECT,
        google_application_credentials=(
            os.getenv("GOOGLE_APPLICATION_CREDENTIALS") or GOOGLE_APPLICATION_CREDENTIALS
        ),
        log_file=os.getenv("PERSONATWIN_LOG_FILE") or LOG_FILE,
        log_level=os.getenv("PERSONATWIN_LOG_LEVEL") or LOG_LEVEL,
    )
