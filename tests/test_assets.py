import pytest
from PIL import Image

from invaders.assets import (
    PNG_SIGNATURE,
    AssetError,
    Texture,
    load_shader_source,
    load_texture,
)


def _save(tmp_path, name, mode, size, pixels):
    image = Image.new(mode, size)
    image.putdata(pixels)
    path = tmp_path / name
    image.save(path, format="PNG")
    return path


def test_rgb_png_loads_with_three_channels(tmp_path):
    pixels = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (10, 20, 30)]
    path = _save(tmp_path, "rgb.png", "RGB", (2, 2), pixels)
    texture = load_texture(path)
    assert texture.width == 2
    assert texture.height == 2
    assert texture.channels == 3
    assert texture.mode == "RGB"
    assert texture.data == bytes(c for p in pixels for c in p)


def test_rgba_png_loads_with_four_channels(tmp_path):
    pixels = [(1, 2, 3, 4), (5, 6, 7, 8), (9, 10, 11, 12)]
    path = _save(tmp_path, "rgba.png", "RGBA", (3, 1), pixels)
    texture = load_texture(str(path))
    assert texture.channels == 4
    assert texture.mode == "RGBA"
    assert texture.data == bytes(c for p in pixels for c in p)


def test_rows_are_top_to_bottom(tmp_path):
    pixels = [(1, 1, 1), (2, 2, 2)]
    path = _save(tmp_path, "tall.png", "RGB", (1, 2), pixels)
    texture = load_texture(path)
    assert texture.row(0) == bytes((1, 1, 1))
    assert texture.row(1) == bytes((2, 2, 2))
    with pytest.raises(IndexError):
        texture.row(2)


def test_missing_file_raises(tmp_path):
    with pytest.raises(AssetError, match="Could not open"):
        load_texture(tmp_path / "absent.png")


def test_empty_file_raises_header_error(tmp_path):
    path = tmp_path / "empty.png"
    path.write_bytes(b"")
    with pytest.raises(AssetError, match="png header"):
        load_texture(path)


def test_non_png_raises(tmp_path):
    path = tmp_path / "fake.png"
    path.write_bytes(b"GIF89a not a png at all")
    with pytest.raises(AssetError, match="not a valid png"):
        load_texture(path)


def test_truncated_png_raises(tmp_path):
    path = tmp_path / "cut.png"
    path.write_bytes(PNG_SIGNATURE + b"\x00\x00")
    with pytest.raises(AssetError):
        load_texture(path)


@pytest.mark.parametrize(
    "mode, pixel, reason",
    [
        ("L", 7, "grayscale"),
        ("LA", (7, 8), "grayscale with alpha"),
        ("P", 3, "palette"),
    ],
)
def test_unsupported_modes_raise(tmp_path, mode, pixel, reason):
    path = _save(tmp_path, f"{mode}.png", mode, (1, 1), [pixel])
    with pytest.raises(AssetError, match=reason):
        load_texture(path)


def test_texture_rejects_wrong_data_length():
    with pytest.raises(ValueError):
        Texture(width=2, height=2, channels=3, data=bytes(5))


def test_texture_rejects_bad_channel_count():
    with pytest.raises(ValueError):
        Texture(width=1, height=1, channels=2, data=bytes(2))


def test_shader_source_round_trip(tmp_path):
    text = "void main() {\n    gl_FragColor = vec4(1.0);\n}\n"
    path = tmp_path / "fragment.glsl"
    path.write_text(text)
    assert load_shader_source(path) == text


def test_missing_shader_raises(tmp_path):
    with pytest.raises(AssetError, match="Could not open"):
        load_shader_source(tmp_path / "vertex.glsl")