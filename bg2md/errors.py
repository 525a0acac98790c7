"""Errors raised while turning a passage page into a document."""


class Bg2mdError(Exception):
    """Base class for failures that stop a conversion."""


class FragmentNotFoundError(Bg2mdError):
    """The page holds no passage fragment between the isolation markers."""


class PassageNotFoundError(Bg2mdError):
    """The fragment was found but no passage text could be extracted."""


class FetchError(Bg2mdError):
    """Retrieving the passage page failed."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Error '{cause}' trying to fetch {url}")
        self.url = url
        self.cause = cause
