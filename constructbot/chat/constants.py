"""
Chat constants and enums.

Long-form assistant copy lives in the ``templates`` folder and is loaded
once at import time, so routing code never depends on the exact prose.
"""

from enum import Enum
from pathlib import Path

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _load_template(file_name: str) -> str:
    return (TEMPLATES_DIR / file_name).read_text(encoding="utf-8").strip()


class ResponseSource(str, Enum):
    """Provenance tag attached to every assistant message."""

    PRIMARY_MODEL = "primary-model"
    SECONDARY_MODEL = "secondary-model"
    DOMAIN_REJECTED = "domain-rejected"
    EXHAUSTED_FALLBACK = "exhausted-fallback"
    WELCOME = "welcome"
    INTERNAL_ERROR = "internal-error"


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class PromptTarget(str, Enum):
    """Which response source a prompt is built for."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


# Generations at or under this many characters are treated as unusable
MIN_VIABLE_RESPONSE_LENGTH = 20

MAX_MESSAGE_LENGTH = 2000

WELCOME_MESSAGE = _load_template("welcome.md")
SCOPE_MESSAGE = _load_template("scope.md")
EXHAUSTED_MESSAGE = _load_template("exhausted.md")
INTERNAL_ERROR_MESSAGE = (
    "I encountered an error while processing your question. Please try again, "
    "and make sure your question is related to construction topics."
)

PRIMARY_PROMPT_PREAMBLE = _load_template("primary_prompt.md")
SECONDARY_PROMPT_PREAMBLE = _load_template("secondary_prompt.md")

EXAMPLE_QUESTIONS = [
    "What are the IS 456 requirements for high-strength concrete mix design?",
    "How do I develop a CPM schedule for a 30-storey commercial building?",
    "What fall protection requirements apply to structural steel erection?",
    "Compare foundation systems for high-rise construction in seismic zones",
]
