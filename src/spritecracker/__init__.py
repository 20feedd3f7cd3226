from .aseprite import DecoderSettings, Preset, aseprite
from .aseprite.errors import (
    BufferUnderrun,
    CelLengthMismatch,
    ChunkSizeMismatch,
    DecompressionFailure,
    FormatError,
    ParseError,
    UnresolvedCelLink,
)
from .aseprite.model import Document

__all__ = (
    'BufferUnderrun',
    'CelLengthMismatch',
    'ChunkSizeMismatch',
    'DecoderSettings',
    'DecompressionFailure',
    'Document',
    'FormatError',
    'ParseError',
    'Preset',
    'UnresolvedCelLink',
    'aseprite',
)
