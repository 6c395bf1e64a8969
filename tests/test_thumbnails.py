from io import BytesIO

from PIL import Image

from clipstack.thumbnails import make_thumbnail

from conftest import make_png


def open_png(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    assert image.format == "PNG"
    return image


def test_thumbnail_fits_longest_side():
    thumb = open_png(make_thumbnail(make_png(size=(400, 100)), (200, 200)))
    assert thumb.size == (200, 50)


def test_small_images_are_not_enlarged():
    thumb = open_png(make_thumbnail(make_png(size=(20, 10)), (200, 200)))
    assert thumb.size == (20, 10)


def test_alpha_is_preserved():
    data = make_png(size=(50, 50), color=(0, 0, 255, 128), mode="RGBA")
    thumb = open_png(make_thumbnail(data, (25, 25)))
    assert thumb.mode == "RGBA"


def test_opaque_images_become_rgb():
    buffered = BytesIO()
    Image.new("L", (30, 30), 128).save(buffered, format="JPEG")
    thumb = open_png(make_thumbnail(buffered.getvalue(), (10, 10)))
    assert thumb.mode == "RGB"


def test_undecodable_bytes_yield_none():
    assert make_thumbnail(b"definitely not an image") is None
    assert make_thumbnail(b"") is None
