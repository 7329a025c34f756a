from .service import DocumentStore, parse_document, validate_document

__all__ = ["DocumentStore", "parse_document", "validate_document"]
