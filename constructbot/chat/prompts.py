"""Prompt assembly for the response sources."""

from constructbot.chat.constants import (
    PRIMARY_PROMPT_PREAMBLE,
    SECONDARY_PROMPT_PREAMBLE,
    PromptTarget,
)

_QUESTION_HEADINGS = {
    PromptTarget.PRIMARY: "Question:",
    PromptTarget.SECONDARY: "**USER'S SPECIFIC QUESTION:**",
}

_PREAMBLES = {
    PromptTarget.PRIMARY: PRIMARY_PROMPT_PREAMBLE,
    PromptTarget.SECONDARY: SECONDARY_PROMPT_PREAMBLE,
}


def build_prompt(query: str, target: PromptTarget | str) -> str:
    """Build the instruction string sent to one response source.

    The preamble sets the persona, the standards frame of reference and the
    formatting rules. The user's query is appended verbatim as the last thing
    in the prompt, so the model answers the actual question.

    Args:
        query: The user's question, unmodified
        target: Which source the prompt is for

    Returns:
        str: The complete prompt
    """
    target = PromptTarget(target)
    return f"{_PREAMBLES[target]}\n\n{_QUESTION_HEADINGS[target]}\n{query}"
