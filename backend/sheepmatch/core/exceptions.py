"""Domain exceptions."""


class SheepMatchError(Exception):
    """Base class for application errors."""


class AssetFetchError(SheepMatchError):
    """A decorative level asset could not be obtained.

    Never fatal: level start logs it and carries on without the asset.
    """


class SessionNotFoundError(SheepMatchError):
    """No game session exists with the requested id."""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id
