import pytest
from PIL import Image

from clayutils.files import FileData, FileLoadError, ImageData, load_file, load_image


def test_load_file_returns_bytes(tmp_path):
    content = bytes(range(256)) * 3
    path = tmp_path / "blob.bin"
    path.write_bytes(content)
    result = load_file(path)
    assert result.data == content
    assert result.size == len(content)


def test_load_file_accepts_str_path(tmp_path):
    path = tmp_path / "text.txt"
    path.write_bytes(b"hello")
    assert load_file(str(path)) == FileData(b"hello")


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    assert load_file(path).size == 0


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileLoadError, match="Failed to open file"):
        load_file(tmp_path / "missing.bin")


def test_load_directory_raises(tmp_path):
    with pytest.raises(FileLoadError):
        load_file(tmp_path)


def test_file_load_error_is_os_error(tmp_path):
    with pytest.raises(OSError):
        load_file(tmp_path / "nope")


@pytest.mark.parametrize("mode,channels", [("L", 1), ("LA", 2), ("RGB", 3), ("RGBA", 4)])
def test_load_image_native_channels(tmp_path, mode, channels):
    image = Image.new(mode, (2, 3))
    raw = bytes((i * 7) % 256 for i in range(2 * 3 * channels))
    image.frombytes(raw)
    path = tmp_path / "img.png"
    image.save(path)
    result = load_image(path)
    assert result == ImageData(raw, 2, 3, channels)


def test_load_paletted_image_expands_to_rgb(tmp_path):
    image = Image.new("RGB", (4, 1), (10, 20, 30)).convert("P")
    path = tmp_path / "pal.png"
    image.save(path)
    result = load_image(path)
    assert result.channels == 3
    assert result.pixels == bytes([10, 20, 30]) * 4


def test_pixel_count_matches_dimensions(tmp_path):
    path = tmp_path / "big.png"
    Image.new("RGB", (5, 7), (1, 2, 3)).save(path)
    result = load_image(path)
    assert len(result.pixels) == result.width * result.height * result.channels


def test_load_image_invalid_data_raises(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(FileLoadError, match="Failed to decode image"):
        load_image(path)


def test_load_image_missing_raises(tmp_path):
    with pytest.raises(FileLoadError):
        load_image(tmp_path / "absent.png")