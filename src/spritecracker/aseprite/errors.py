import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from spritecracker.aseprite.schema import ChunkType

if TYPE_CHECKING:
    from spritecracker.aseprite.preset import DecoderSettings


def _describe(chunk_type: ChunkType | int | None) -> str:
    if chunk_type is None:
        return ''
    if isinstance(chunk_type, ChunkType):
        return f' in {chunk_type.name} chunk (0x{chunk_type.value:04x})'
    return f' in chunk 0x{chunk_type:04x}'


class ParseError(Exception):
    """Fatal decoding error. No partial document is produced."""

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        chunk_type: ChunkType | int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.chunk_type = chunk_type

    def locate(self, offset: int, chunk_type: ChunkType | int | None) -> None:
        if self.offset is None:
            self.offset = offset
        if self.chunk_type is None:
            self.chunk_type = chunk_type

    def __str__(self) -> str:
        where = f' at offset {self.offset}' if self.offset is not None else ''
        return f'{self.message}{where}{_describe(self.chunk_type)}'


class BufferUnderrun(ParseError):
    pass


class ChunkSizeMismatch(ParseError):
    def __init__(self, expected: int, consumed: int, **kwargs) -> None:
        super().__init__(
            f'chunk body size mismatch: declared {expected} but consumed {consumed}',
            **kwargs,
        )
        self.expected = expected
        self.consumed = consumed


class DecompressionFailure(ParseError):
    pass


class CelLengthMismatch(DecompressionFailure):
    def __init__(self, expected: int, actual: int, **kwargs) -> None:
        super().__init__(
            f'cel payload holds {actual} bytes but {expected} were expected',
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class UnresolvedCelLink(ParseError):
    def __init__(self, frame: int, layer: int, source: int) -> None:
        super().__init__(
            f'linked cel in frame {frame} (layer {layer})'
            f' has no source cel in frame {source}',
        )
        self.frame = frame
        self.layer = layer
        self.source = source


class FormatError(ParseError):
    pass


class BadMagicError(FormatError):
    def __init__(self, expected: int, found: int, **kwargs) -> None:
        super().__init__(
            f'bad magic number: expected 0x{expected:04X} but got 0x{found:04X}',
            **kwargs,
        )
        self.expected = expected
        self.found = found


class UnknownChunkTypeError(Exception):
    def __init__(self, code: int, offset: int, size: int) -> None:
        super().__init__(
            f'unknown chunk type 0x{code:04x} at offset {offset},'
            f' skipping {size} bytes...'
        )
        self.code = code
        self.offset = offset
        self.size = size


@contextmanager
def unknown_check(cfg: 'DecoderSettings') -> Iterator[None]:
    try:
        yield
    except UnknownChunkTypeError as exc:
        getattr(cfg, 'logger', logging).warning(exc)
