from typing import TYPE_CHECKING

import numpy as np

from spritecracker.aseprite.errors import BadMagicError
from spritecracker.aseprite.schema import FILE_MAGIC, FRAME_MAGIC, ChunkType
from spritecracker.kernel.cursor import ByteCursor
from spritecracker.kernel.structured import ArrayBuffer, StructuredTuple

if TYPE_CHECKING:
    from spritecracker.aseprite.preset import DecoderSettings


class FileHeader(StructuredTuple):
    dtype = np.dtype(
        [
            ('file_size', '<u4'),
            ('magic', '<u2'),
            ('num_frames', '<u2'),
            ('width', '<u2'),
            ('height', '<u2'),
            ('color_depth', '<u2'),
            ('flags', '<u4'),
            ('speed', '<u2'),  # deprecated, see frame duration
            ('_zero1', '<u4'),
            ('_zero2', '<u4'),
            ('transparent_index', 'u1'),
            ('_ignore', 'V3'),
            ('num_colors', '<u2'),
            ('pixel_width', 'u1'),
            ('pixel_height', 'u1'),
            ('grid_x', '<i2'),
            ('grid_y', '<i2'),
            ('grid_width', '<u2'),
            ('grid_height', '<u2'),
            ('_future', 'V84'),
        ]
    )

    @property
    def pixel_ratio(self) -> str:
        return f'{self["pixel_width"]}:{self["pixel_height"]}'


class FrameHeader(StructuredTuple):
    dtype = np.dtype(
        [
            ('size', '<u4'),
            ('magic', '<u2'),
            ('old_chunks', '<u2'),
            ('duration', '<u2'),
            ('_future', 'V2'),
            ('chunks', '<u4'),
        ]
    )

    @property
    def num_chunks(self) -> int:
        # a zero new-format count means only the legacy one is filled in
        return self['chunks'] or self['old_chunks']


class ChunkHeader(StructuredTuple):
    dtype = np.dtype(
        [
            ('size', '<u4'),  # includes the header itself
            ('type', '<u2'),
        ]
    )

    @property
    def size(self) -> int:
        return self['size']

    @property
    def body_size(self) -> int:
        return self['size'] - self.itemsize()

    @property
    def type(self) -> ChunkType | int:
        return ChunkType.lookup(self['type'])


def verify_magic(
    cfg: 'DecoderSettings',
    expected: int,
    found: int,
    offset: int,
) -> None:
    if cfg.verify_magic and found != expected:
        raise BadMagicError(expected, found, offset=offset)


def read_file_header(cfg: 'DecoderSettings', cursor: ByteCursor) -> FileHeader:
    offset = cursor.offset
    header = FileHeader.from_buffer(cursor.read_view(FileHeader.itemsize()))
    verify_magic(cfg, FILE_MAGIC, header['magic'], offset + 4)
    return header


def read_frame_header(cfg: 'DecoderSettings', cursor: ByteCursor) -> FrameHeader:
    offset = cursor.offset
    header = FrameHeader.from_buffer(cursor.read_view(FrameHeader.itemsize()))
    verify_magic(cfg, FRAME_MAGIC, header['magic'], offset + 4)
    return header


def read_chunk_header(cursor: ByteCursor) -> ChunkHeader:
    return ChunkHeader.from_buffer(cursor.read_view(ChunkHeader.itemsize()))


def is_aseprite(buffer: ArrayBuffer) -> bool:
    cursor = ByteCursor(buffer)
    if len(cursor) < FileHeader.itemsize():
        return False
    return cursor.peek_u16(4) == FILE_MAGIC
