# region Docstring
"""
clipstack.clipboard
Read-only access to the OS clipboard.
Overview:
- Defines the clipboard read surface the monitor consumes: an opaque change counter and
    the ordered list of representations currently on the clipboard.
- Provides two accessors: one backed by the real system clipboard and one in-memory
    clipboard for embedding and tests.
Contents:
- Pydantic models:
    - Representation:
        One typed encoding of the clipboard payload: a format tag (UTI), the payload as
        bytes or text, and for files the file name and MIME type.
- Protocols:
    - ClipboardAccessor: change_counter() and read_representations().
- Accessors:
    - MemoryClipboard:
        In-process clipboard. Every `set_*` call replaces the contents and bumps the
        change counter, like an OS pasteboard does.
    - SystemClipboard:
        Reads text through pyperclip and images or copied files through Pillow's
        ImageGrab. Neither exposes a change counter, so one is synthesised from a
        digest of what was read; the counter only moves when the digest changes.
Design notes:
- Accessors never write to the OS clipboard, so the engine cannot feed back on its own
    captures.
- SystemClipboard raises ClipboardReadError only when no backend could be read at all;
    the monitor treats that as a transient failure for the tick.
"""
# endregion
# region Imports
import hashlib
import logging
from io import BytesIO
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

import pyperclip
from PIL import Image, ImageGrab
from pydantic import BaseModel, ConfigDict, Field

from clipstack.constants import FormatTags, ImageFormats
from clipstack.exceptions import ClipboardReadError
from clipstack.utils import get_mime_type

# endregion
# region Representation


class Representation(BaseModel):
    """
    One typed encoding of the current clipboard payload.

    Attributes:
        format_tag (str): Uniform type identifier of this encoding.
        payload (Union[bytes, str]): The encoded payload.
        name (Optional[str]): File name, for file representations.
        mime_type (Optional[str]): MIME type, for file representations.
    """

    model_config = ConfigDict(frozen=True)

    format_tag: str = Field(..., description="Uniform type identifier")
    payload: Union[bytes, str] = Field(..., description="Encoded payload")
    name: Optional[str] = Field(None, description="File name, for files")
    mime_type: Optional[str] = Field(None, description="MIME type, for files")

    @property
    def is_empty(self) -> bool:
        return len(self.payload) == 0

    def as_bytes(self) -> bytes:
        if isinstance(self.payload, bytes):
            return self.payload
        return self.payload.encode("utf-8")

    def as_text(self) -> str:
        if isinstance(self.payload, str):
            return self.payload
        return self.payload.decode("utf-8")


# endregion
# region Accessor Protocol


@runtime_checkable
class ClipboardAccessor(Protocol):
    """Read surface of a clipboard."""

    def change_counter(self) -> int:
        """Opaque value that changes on every clipboard mutation."""
        ...

    def read_representations(self) -> list[Representation]:
        """Current representations, in the clipboard's preference order."""
        ...


# endregion
# region MemoryClipboard


class MemoryClipboard:
    """
    In-process clipboard implementing ClipboardAccessor.
    """

    def __init__(self):
        self._counter = 0
        self._representations: list[Representation] = []

    def change_counter(self) -> int:
        return self._counter

    def read_representations(self) -> list[Representation]:
        return list(self._representations)

    def set(self, *representations: Representation) -> None:
        """Replace the clipboard contents with the given representations."""
        self._representations = list(representations)
        self._counter += 1

    def set_text(self, text: str) -> None:
        self.set(Representation(format_tag=FormatTags.UTF8_TEXT.value, payload=text))

    def set_image(self, data: bytes, format_tag: str = ImageFormats.PNG.value) -> None:
        self.set(Representation(format_tag=format_tag, payload=data))

    def set_file(self, data: bytes, name: str, mime_type: str) -> None:
        self.set(
            Representation(
                format_tag=FormatTags.FILE_URL.value,
                payload=data,
                name=name,
                mime_type=mime_type,
            )
        )

    def clear(self) -> None:
        self.set()


# endregion
# region SystemClipboard


class SystemClipboard:
    """
    ClipboardAccessor backed by the OS clipboard (pyperclip + Pillow ImageGrab).
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = (logger or logging.getLogger("clipstack")).getChild(
            "SystemClipboard"
        )
        self._counter = 0
        self._signature: Optional[str] = None
        self._pending: list[Representation] = []

    def change_counter(self) -> int:
        text, grabbed = self._read_raw()
        signature = self._digest(text, grabbed)
        if signature != self._signature:
            self._signature = signature
            self._counter += 1
            self._pending = self._build(text, grabbed)
        return self._counter

    def read_representations(self) -> list[Representation]:
        return list(self._pending)

    def _read_raw(self) -> tuple[Optional[str], Union[Image.Image, list, None]]:
        text: Optional[str] = None
        grabbed: Union[Image.Image, list, None] = None
        failures = 0
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            failures += 1
            self.logger.debug(f"Text clipboard unavailable: {e}")
        try:
            grabbed = ImageGrab.grabclipboard()
        except (OSError, NotImplementedError, ValueError) as e:
            failures += 1
            self.logger.debug(f"Image clipboard unavailable: {e}")
        if failures == 2:
            raise ClipboardReadError("No clipboard backend could be read")
        return text, grabbed

    @staticmethod
    def _digest(text: Optional[str], grabbed: Union[Image.Image, list, None]) -> str:
        digest = hashlib.sha256()
        if isinstance(grabbed, Image.Image):
            digest.update(b"image\0")
            digest.update(grabbed.tobytes())
        elif isinstance(grabbed, list):
            digest.update(b"files\0")
            digest.update("\0".join(str(p) for p in grabbed).encode("utf-8"))
        if text:
            digest.update(b"text\0")
            digest.update(text.encode("utf-8"))
        return digest.hexdigest()

    def _build(
        self, text: Optional[str], grabbed: Union[Image.Image, list, None]
    ) -> list[Representation]:
        representations: list[Representation] = []
        if isinstance(grabbed, Image.Image):
            buffered = BytesIO()
            grabbed.save(buffered, format="PNG")
            representations.append(
                Representation(
                    format_tag=ImageFormats.PNG.value, payload=buffered.getvalue()
                )
            )
        elif isinstance(grabbed, list):
            for item in grabbed:
                path = Path(item)
                if not path.is_file():
                    continue
                try:
                    data = path.read_bytes()
                except OSError as e:
                    self.logger.debug(f"Could not read copied file {path}: {e}")
                    continue
                representations.append(
                    Representation(
                        format_tag=FormatTags.FILE_URL.value,
                        payload=data,
                        name=path.name,
                        mime_type=get_mime_type(path) or "application/octet-stream",
                    )
                )
        if text:
            representations.append(
                Representation(format_tag=FormatTags.UTF8_TEXT.value, payload=text)
            )
        return representations


# endregion

__all__ = [
    "Representation",
    "ClipboardAccessor",
    "MemoryClipboard",
    "SystemClipboard",
]
