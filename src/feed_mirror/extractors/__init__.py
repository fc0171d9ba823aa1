"""Extraction of titles, identifiers and resources from article documents."""

from .metadata import TITLE_STRATEGIES, UNTITLED, extract_comment_id, extract_title
from .naming import (
    allocate_resource_name,
    guess_extension,
    hash16,
    safe_document_name,
)
from .resource_extractor import extract_resource_urls
from .url_classifier import CDN_HOSTS, is_harvestable

__all__ = [
    "CDN_HOSTS",
    "TITLE_STRATEGIES",
    "UNTITLED",
    "allocate_resource_name",
    "extract_comment_id",
    "extract_resource_urls",
    "extract_title",
    "guess_extension",
    "hash16",
    "is_harvestable",
    "safe_document_name",
]
