# region Docstring
"""
clipstack.classifier
Turns the representations on the clipboard into exactly one content variant.
Overview:
- Walks a fixed priority list of recognised format tags and selects the first
    representation matching it, in the clipboard's own preference order.
- Priority: images (png, jpeg, tiff, heic, webp, bmp, gif) > file > plain text > url >
    rich text > html. A payload carrying both an image and text is captured as an image.
Contents:
- Pydantic models:
    - Classification: the chosen content variant and its content type identifier.
- Functions:
    - classify(representations) -> Optional[Classification]
Design notes:
- Zero-length representations never match. When nothing matches the payload is
    unclassifiable and classify returns None; this is not an error.
- Image bytes are trusted as tagged and not decoded here. Text payloads delivered as
    bytes are decoded as strict UTF-8 and a failure propagates to the monitor, which
    drops the tick.
"""
# endregion
# region Imports
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from clipstack.clipboard import Representation
from clipstack.constants import IMAGE_FORMAT_LIST, TEXT_FORMAT_LIST, FormatTags
from clipstack.models import (
    ContentVariant,
    FileContent,
    HtmlContent,
    ImageContent,
    RichTextContent,
    TextContent,
    UrlContent,
)

# endregion


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: ContentVariant
    content_type: str


def _first(
    representations: list[Representation], format_tag: str
) -> Optional[Representation]:
    for rep in representations:
        if rep.format_tag == format_tag:
            return rep
    return None


def classify(representations: Iterable[Representation]) -> Optional[Classification]:
    """
    Select the content variant for a set of clipboard representations.

    Args:
        representations (Iterable[Representation]): Representations in the clipboard's
            preference order.

    Returns:
        Optional[Classification]: The classified content, or None if unclassifiable.
    """
    candidates = [rep for rep in representations if not rep.is_empty]
    if not candidates:
        return None

    for fmt in IMAGE_FORMAT_LIST:
        rep = _first(candidates, fmt)
        if rep is not None:
            return Classification(
                content=ImageContent(data=rep.as_bytes(), format=fmt),
                content_type=fmt,
            )

    for rep in candidates:
        if rep.format_tag == FormatTags.FILE_URL.value and rep.name and rep.mime_type:
            return Classification(
                content=FileContent(
                    data=rep.as_bytes(), name=rep.name, mime_type=rep.mime_type
                ),
                content_type=FormatTags.FILE_URL.value,
            )

    for fmt in TEXT_FORMAT_LIST:
        rep = _first(candidates, fmt)
        if rep is not None:
            return Classification(
                content=TextContent(content=rep.as_text()), content_type=fmt
            )

    rep = _first(candidates, FormatTags.URL.value)
    if rep is not None:
        return Classification(
            content=UrlContent(url=rep.as_text()), content_type=FormatTags.URL.value
        )

    rep = _first(candidates, FormatTags.RTF.value)
    if rep is not None:
        return Classification(
            content=RichTextContent(data=rep.as_bytes()),
            content_type=FormatTags.RTF.value,
        )

    rep = _first(candidates, FormatTags.HTML.value)
    if rep is not None:
        return Classification(
            content=HtmlContent(content=rep.as_text()),
            content_type=FormatTags.HTML.value,
        )

    return None


__all__ = ["Classification", "classify"]
