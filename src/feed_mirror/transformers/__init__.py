"""Transformers applied to fetched article documents."""

from .document_rewriter import rewrite_document

__all__ = ["rewrite_document"]
