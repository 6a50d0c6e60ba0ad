"""
Admin Roster exceptions.

Custom exception classes for roster store and selection errors.
Field-level form validation failures are returned as data by the form
validator; AdminValidationError carries them out of write paths that
cannot return them.
"""


class RosterError(Exception):
    """Base exception for roster-related errors."""
    pass


class AdminNotFoundError(RosterError):
    """
    Raised when an operation references an admin id absent from the store.

    Applies uniformly to update, delete and detail selection.
    """

    def __init__(self, admin_id: int) -> None:
        self.admin_id = admin_id
        super().__init__(f"Admin {admin_id} not found")


class DuplicateAdminIdError(RosterError):
    """
    Raised when a write would make two records share an id.

    The offending write is rejected and the store is left untouched.
    """

    def __init__(self, admin_id: int) -> None:
        self.admin_id = admin_id
        super().__init__(f"Admin id {admin_id} already exists in the store")


class AdminValidationError(RosterError):
    """Raised when a write would store contact fields the form rules reject."""

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = field_errors
        super().__init__("Validation failed")


class SelectionScopeError(RosterError):
    """Raised when a bulk selection targets an id not on the visible page."""

    def __init__(self, admin_id: int) -> None:
        self.admin_id = admin_id
        super().__init__(f"Admin {admin_id} is not on the current page")


class RosterNotInitializedError(RosterError):
    """
    Raised when the roster is used before its store has been initialized.

    This is a programming error (e.g. handling events before on_entry).
    """
    pass
