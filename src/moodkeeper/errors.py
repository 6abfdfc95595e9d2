from __future__ import annotations


class MoodkeeperError(Exception):
    """Base class for every error the journal core reports."""


class ValidationError(MoodkeeperError, ValueError):
    pass


class InvalidEntryError(ValidationError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class MissingSelectionError(ValidationError):
    pass


class ScopeNotFoundError(MoodkeeperError, LookupError):
    def __init__(self, scope_id: str):
        super().__init__(f"Unknown scope {scope_id!r}")
        self.scope_id = scope_id


class ScopeMismatchError(MoodkeeperError):
    pass


class ProfileLimitError(MoodkeeperError):
    pass
