class StreamUrlsError(Exception):
    """Base class for errors raised by stream_urls."""

    pass


class FetchStreamError(StreamUrlsError):
    """Raised when streaming a resource fails at the HTTP level."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to stream {url}: {message}")
        self.url = url
        self.status_code = status_code


class StreamConsumed(StreamUrlsError):
    """Raised when a concatenated stream is iterated a second time."""

    pass
