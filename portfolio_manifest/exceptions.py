"""Exceptions raised while building a project manifest."""


class ManifestError(Exception):
    """Base exception for manifest generation errors."""
    pass


class RepositoryListingError(ManifestError):
    """Raised when the owner's repository listing cannot be fetched."""

    def __init__(self, owner: str, message: str):
        super().__init__(message)
        self.owner = owner


class MalformedResponseError(ManifestError):
    """Raised when the API answers with a payload of an unexpected shape."""
    pass
