import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from spritecracker.aseprite.builder import DocumentBuilder
from spritecracker.aseprite.chunks import CHUNK_DECODERS, ChunkContext
from spritecracker.aseprite.errors import (
    BufferUnderrun,
    ChunkSizeMismatch,
    FormatError,
    ParseError,
    UnknownChunkTypeError,
    unknown_check,
)
from spritecracker.aseprite.headers import (
    ChunkHeader,
    read_chunk_header,
    read_file_header,
    read_frame_header,
)
from spritecracker.aseprite.links import resolve_links
from spritecracker.aseprite.model import Document
from spritecracker.aseprite.schema import SKIPPED, ChunkType
from spritecracker.kernel.cursor import (
    BufferUnderrunError,
    ByteCursor,
    TextDecodeError,
)
from spritecracker.kernel.fileio import map_file
from spritecracker.kernel.structured import ArrayBuffer

if TYPE_CHECKING:
    from spritecracker.aseprite.preset import DecoderSettings


@contextmanager
def located(offset: int, chunk_type: ChunkType | int | None = None) -> Iterator[None]:
    """Tag errors escaping the block with where decoding stood."""
    try:
        yield
    except BufferUnderrunError as exc:
        raise BufferUnderrun(str(exc), offset=offset, chunk_type=chunk_type) from exc
    except TextDecodeError as exc:
        raise FormatError(str(exc), offset=offset, chunk_type=chunk_type) from exc
    except ParseError as exc:
        exc.locate(offset, chunk_type)
        raise


def read_chunk(
    cfg: 'DecoderSettings',
    cursor: ByteCursor,
    builder: DocumentBuilder,
) -> None:
    offset = cursor.offset
    with located(offset):
        chunk = read_chunk_header(cursor)
    ctype = chunk.type
    with located(offset, ctype):
        if chunk.size < ChunkHeader.itemsize():
            raise FormatError(f'declared chunk size {chunk.size} is below header size')

        decode = CHUNK_DECODERS.get(ctype) if isinstance(ctype, ChunkType) else None
        if decode is None:
            with unknown_check(cfg):
                if ctype not in SKIPPED:
                    raise UnknownChunkTypeError(int(ctype), offset, chunk.body_size)
            cursor.skip(chunk.body_size)
            return

        start = cursor.offset
        payload = decode(cursor, ChunkContext(cfg, builder.header, chunk))
        consumed = cursor.offset - start
        if consumed != chunk.body_size:
            raise ChunkSizeMismatch(chunk.body_size, consumed)
        builder.add(payload)


def read_frame(
    cfg: 'DecoderSettings',
    cursor: ByteCursor,
    builder: DocumentBuilder,
) -> None:
    offset = cursor.offset
    with located(offset):
        header = read_frame_header(cfg, cursor)
    if not header['chunks'] and header['old_chunks']:
        getattr(cfg, 'logger', logging).debug(
            f'frame at offset {offset} uses legacy chunk count'
        )
    builder.begin_frame(header)
    for _ in range(header.num_chunks):
        read_chunk(cfg, cursor, builder)
    if cursor.offset - offset != header['size']:
        getattr(cfg, 'logger', logging).warning(
            f'frame at offset {offset} declares {header["size"]} bytes'
            f' but its chunks span {cursor.offset - offset}'
        )


def parse_document(
    cfg: 'DecoderSettings',
    buffer: ArrayBuffer,
    name: str | None = None,
) -> Document:
    cursor = ByteCursor(buffer)
    with located(0):
        header = read_file_header(cfg, cursor)
    builder = DocumentBuilder(header, name=name)
    for idx in range(header['num_frames']):
        getattr(cfg, 'logger', logging).debug(
            f'reading frame {idx} at offset {cursor.offset}'
        )
        read_frame(cfg, cursor, builder)
    return builder.build(resolve_links(cfg, builder.frames))


def parse_path(
    cfg: 'DecoderSettings',
    path: str | os.PathLike[str],
) -> Document:
    with map_file(path) as resource:
        return parse_document(cfg, resource, name=Path(path).stem)
