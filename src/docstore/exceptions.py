from __future__ import annotations


class DocStoreError(Exception):
    """Base class for every error raised by docstore."""


class InvalidDocumentError(DocStoreError):
    """The request payload is not a non-empty JSON object."""

    default_message = "Request body must contain a non-empty JSON object."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DocumentNotFoundError(DocStoreError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Data not found for key: {key}")


class StorageError(DocStoreError):
    """A storage call failed. The cause is chained and only ever logged."""

    def __init__(self, operation: str, key: str):
        self.operation = operation
        self.key = key
        super().__init__(f"Storage failure during data {operation} for key: {key}")


class StoreInitializationError(DocStoreError):
    """The backing store could not be reached or its schema could not be ensured."""
