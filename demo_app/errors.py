"""Errors shared by the catalog adapter, the task repository and the API layer."""


class ResourceNotFoundError(Exception):
    """Raised when the requested identifier does not exist.

    Both the FakeStore adapter and the task repository normalize their own
    not-found signals (empty body, ``null`` body, missing row) into this error.
    """


class CommandValidationError(ValueError):
    """Raised when a command is constructed from invalid field values."""


class StorageError(Exception):
    """Raised when the database fails for any reason other than a missing row."""
