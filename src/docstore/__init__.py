from .exceptions import (
    DocStoreError,
    DocumentNotFoundError,
    InvalidDocumentError,
    StorageError,
    StoreInitializationError,
)

__version__ = "0.1.0"

__all__ = [
    "DocStoreError",
    "DocumentNotFoundError",
    "InvalidDocumentError",
    "StorageError",
    "StoreInitializationError",
    "__version__",
]
