"""Custom exception classes for the local LLM client."""


class LocalLLMError(Exception):
    """Base exception for all local LLM errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"Local LLM Error ({self.status_code}): {self.message}"
        return f"Local LLM Error: {self.message}"


class LocalLLMConnectionError(LocalLLMError):
    """Raised when the local LLM server cannot be reached or times out."""

    pass


class LocalLLMServerError(LocalLLMError):
    """Raised when the local LLM server answers with a non-2xx status."""

    pass


class LocalLLMResponseError(LocalLLMError):
    """Raised when the reply body is not the expected JSON shape."""

    pass
