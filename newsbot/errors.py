"""Exception types shared across the bot."""


class NewsBotError(Exception):
    """Base class for all bot errors."""


class ConfigError(NewsBotError):
    """Missing or invalid configuration."""


class FetchError(NewsBotError):
    """A page or feed could not be fetched, or its links could not be selected."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"{detail} ({url})")


class ExtractionError(NewsBotError):
    """Readable article content could not be extracted from a page."""

    def __init__(self, url: str, detail: str = "Could not parse article content") -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"{detail} ({url})")


class SlackAPIError(NewsBotError):
    """The Slack Web API rejected a call or could not be reached."""

    def __init__(self, method: str, error: str) -> None:
        self.method = method
        self.error = error
        super().__init__(f"Slack {method} failed: {error}")
