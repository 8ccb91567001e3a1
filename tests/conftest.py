import struct
import zlib

import pytest

from slide_studio.base import create_base


def _png_chunk(kind, data):
    body = kind + data
    return struct.pack('>I', len(data)) + body + struct.pack('>I', zlib.crc32(body) & 0xFFFFFFFF)


def make_png(width=2, height=1):
    """Smallest useful RGB PNG: every pixel red."""
    header = struct.pack('>IIBBBBB', width, height, 8, 2, 0, 0, 0)
    rows = b''.join(b'\x00' + b'\xff\x00\x00' * width for _ in range(height))
    return (
        b'\x89PNG\r\n\x1a\n'
        + _png_chunk(b'IHDR', header)
        + _png_chunk(b'IDAT', zlib.compress(rows))
        + _png_chunk(b'IEND', b'')
    )


@pytest.fixture
def package(tmp_path):
    """A fresh base package: 11 layouts, one title slide on layout 1."""
    return create_base(tmp_path / 'work')


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / 'pixel.png'
    path.write_bytes(make_png())
    return path
