# region Docstring
"""
clipstack.models.content
Domain models for the content carried by a clipboard history entry.
Overview:
- Provides one frozen Pydantic model per kind of clipboard content, joined into the
    closed `ContentVariant` union discriminated on the `type` field.
- Each variant knows its canonical byte representation, which is what entries hash for
    deduplication.
Contents:
- Pydantic models:
    - ImageContent: raw image bytes plus the declared image format identifier.
    - TextContent: plain UTF-8 text.
    - FileContent: raw file bytes plus file name and MIME type.
    - UrlContent: a URL string.
    - RichTextContent: raw RTF bytes.
    - HtmlContent: an HTML string.
- Type aliases:
    - ContentVariant: Annotated discriminated union of all variants.
    - ContentTag: Literal of all discriminator values.
Design notes:
- The union is closed: consumers dispatch with `match` on the variant class and every
    consumer in the package handles all six variants.
- File content hashes over name and MIME type as well as data, so the same bytes copied
    under two names are two distinct entries.
"""
# endregion
# region Imports
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from clipstack.constants import ImageFormats

# endregion
# region Content Variants


class ImageContent(BaseModel):
    """Image bytes as found on the clipboard, undecoded."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    data: bytes = Field(..., description="Raw image bytes")
    format: str = Field(
        ImageFormats.PNG.value, description="Declared image format identifier (UTI)"
    )

    def canonical_bytes(self) -> bytes:
        return self.data


class TextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    content: str = Field(..., description="Plain text")

    def canonical_bytes(self) -> bytes:
        return self.content.encode("utf-8")


class FileContent(BaseModel):
    """A copied file, carried by value."""

    model_config = ConfigDict(frozen=True)

    type: Literal["file"] = "file"
    data: bytes = Field(..., description="Raw file bytes")
    name: str = Field(..., description="File name")
    mime_type: str = Field(..., description="MIME type of the file")

    def canonical_bytes(self) -> bytes:
        return b"\0".join(
            [self.name.encode("utf-8"), self.mime_type.encode("utf-8"), self.data]
        )


class UrlContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["url"] = "url"
    url: str = Field(..., description="URL string")

    def canonical_bytes(self) -> bytes:
        return self.url.encode("utf-8")


class RichTextContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["rtf"] = "rtf"
    data: bytes = Field(..., description="Raw RTF bytes")

    def canonical_bytes(self) -> bytes:
        return self.data


class HtmlContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["html"] = "html"
    content: str = Field(..., description="HTML markup")

    def canonical_bytes(self) -> bytes:
        return self.content.encode("utf-8")


# endregion
# region Union

ContentVariant = Annotated[
    Union[
        ImageContent,
        TextContent,
        FileContent,
        UrlContent,
        RichTextContent,
        HtmlContent,
    ],
    Field(discriminator="type"),
]
"""Closed union of every kind of clipboard content."""

ContentTag = Literal["image", "text", "file", "url", "rtf", "html"]

# endregion

__all__ = [
    "ImageContent",
    "TextContent",
    "FileContent",
    "UrlContent",
    "RichTextContent",
    "HtmlContent",
    "ContentVariant",
    "ContentTag",
]
