import io
from pathlib import Path

import pytest
from PIL import Image
from PIL.PngImagePlugin import PngInfo


@pytest.fixture
def test_root_dir():
    return Path(__file__).parent


def make_png(mode='RGB', size=(5, 10), text=None):
    image = Image.new(mode, size, color='red' if mode != 'P' else 0)
    if mode == 'P':
        image.putpalette([255, 0, 0, 0, 255, 0] + [0] * (256 * 3 - 6))

    info = None
    if text:
        info = PngInfo()
        for key, value in text.items():
            info.add_text(key, value)

    buffer = io.BytesIO()
    image.save(buffer, format='PNG', pnginfo=info)

    return buffer.getvalue()


@pytest.fixture
def png_data():
    '''An RGB image with a tEXt chunk, so that we have IHDR, tEXt, IDAT and IEND'''
    return make_png(text={'Comment': 'made by pillow'})


@pytest.fixture
def palette_png_data():
    return make_png(mode='P')


@pytest.fixture
def png_path(tmp_path, png_data):
    path = tmp_path / 'image.png'
    path.write_bytes(png_data)

    return path
