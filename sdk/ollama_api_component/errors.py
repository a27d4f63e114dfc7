class OllamaClientError(Exception):
    """Base class for errors raised by the Ollama client itself."""


class OllamaApiError(OllamaClientError):
    """
    The Ollama server answered with a non-2xx status.

    Attributes:
        status_code: The HTTP status code returned by the server.
        status_text: The reason phrase that accompanied the status code.
    """

    def __init__(self, status_code: int, status_text: str):
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(f"Ollama API error: {status_code} {status_text}")


class OllamaTimeoutError(OllamaClientError, TimeoutError):
    """
    No response headers arrived before the configured deadline.

    Attributes:
        timeout: The configured timeout in milliseconds.
    """

    def __init__(self, timeout: int):
        self.timeout = timeout
        super().__init__(f"Ollama API request timeout after {timeout}ms")
