"""
clipstack.models
Domain models for captured clipboard content.
Overview:
- Provides the closed content union (one Pydantic model per content kind).
- Provides the history entry and provenance models.
Contents:
- content:
    - ImageContent, TextContent, FileContent, UrlContent, RichTextContent, HtmlContent
    - ContentVariant, ContentTag
- entry:
    - HistoryEntry, Provenance, ProvenanceKind, compute_content_hash
"""

from .content import (
    ContentTag,
    ContentVariant,
    FileContent,
    HtmlContent,
    ImageContent,
    RichTextContent,
    TextContent,
    UrlContent,
)
from .entry import HistoryEntry, Provenance, ProvenanceKind, compute_content_hash

__all__ = [
    "ContentTag",
    "ContentVariant",
    "FileContent",
    "HtmlContent",
    "ImageContent",
    "RichTextContent",
    "TextContent",
    "UrlContent",
    "HistoryEntry",
    "Provenance",
    "ProvenanceKind",
    "compute_content_hash",
]
