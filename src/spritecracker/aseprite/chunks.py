"""Decoders for the chunk types carrying document content.

Each decoder consumes exactly one chunk body from the cursor and returns
one of the `ChunkPayload` records. The frame loop owns size bookkeeping.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from spritecracker.aseprite.compress import decompress
from spritecracker.aseprite.errors import CelLengthMismatch, FormatError
from spritecracker.aseprite.headers import ChunkHeader, FileHeader
from spritecracker.aseprite.model import (
    Cel,
    ChunkPayload,
    Color,
    ColorProfile,
    ExternalTileset,
    Layer,
    Palette,
    Point,
    Rect,
    Slice,
    SliceKey,
    Tag,
    TagList,
    Tileset,
    TilemapInfo,
)
from spritecracker.aseprite.schema import (
    COLOR_PROFILE_TYPES,
    LOOP_DIRECTIONS,
    CelType,
    ChunkType,
    ColorProfileType,
    HeaderFlags,
    LayerType,
    PaletteEntryFlags,
    SliceFlags,
    TilesetFlags,
)
from spritecracker.kernel.cursor import ByteCursor

if TYPE_CHECKING:
    from spritecracker.aseprite.preset import DecoderSettings

# bytes preceding the pixel data in image cels, chunk header included
CEL_IMAGE_PREFIX = 26
# bytes preceding the tile data in tilemap cels, chunk header included
CEL_TILEMAP_PREFIX = 54

T = TypeVar('T')


@dataclass(frozen=True, slots=True)
class ChunkContext:
    cfg: 'DecoderSettings'
    header: FileHeader
    chunk: ChunkHeader


def lookup_enum(choices: tuple[T, ...], index: int, what: str) -> T:
    if not 0 <= index < len(choices):
        raise FormatError(f'invalid {what} index {index}')
    return choices[index]


def read_color_profile(cursor: ByteCursor, ctx: ChunkContext) -> ColorProfile:
    ptype = lookup_enum(COLOR_PROFILE_TYPES, cursor.read_u16(), 'color profile type')
    flags = cursor.read_u16()
    gamma = cursor.read_fixed()
    cursor.skip(8)
    icc = None
    if ptype == ColorProfileType.ICC:
        size = cursor.read_u32()
        if ctx.cfg.keep_icc:
            icc = cursor.read_bytes(size)
        else:
            cursor.skip(size)
    return ColorProfile(ptype, flags, gamma, icc)


def read_tags(cursor: ByteCursor, ctx: ChunkContext) -> TagList:
    revision = ctx.cfg.tags_revision
    directions = LOOP_DIRECTIONS[revision]
    count = cursor.read_u16()
    cursor.skip(8)
    tags = []
    for _ in range(count):
        from_frame = cursor.read_u16()
        to_frame = cursor.read_u16()
        direction = lookup_enum(directions, cursor.read_u8(), 'loop direction')
        if revision == 'legacy':
            repeat = 0
            cursor.skip(8)
        else:
            repeat = cursor.read_u16()
            cursor.skip(6)
        red, green, blue = cursor.read_view(3)
        cursor.skip(1)
        name = cursor.read_string()
        tags.append(
            Tag(name, from_frame, to_frame, direction, repeat, (red, green, blue))
        )
    return TagList(tuple(tags))


def read_palette(cursor: ByteCursor, ctx: ChunkContext) -> Palette:
    size = cursor.read_u32()
    first = cursor.read_u32()
    last = cursor.read_u32()
    cursor.skip(8)
    colors = []
    for _ in range(size):
        flags = cursor.read_u16()
        red, green, blue, alpha = cursor.read_view(4)
        if flags & PaletteEntryFlags.HAS_NAME:
            colors.append(Color(red, green, blue, alpha, cursor.read_string()))
        else:
            colors.append(Color(red, green, blue, alpha))
    transparent = (
        ctx.header['transparent_index'] if ctx.header['color_depth'] == 8 else None
    )
    return Palette(size, first, last, tuple(colors), transparent)


def read_tileset(cursor: ByteCursor, ctx: ChunkContext) -> Tileset:
    tileset_id = cursor.read_u32()
    flags = cursor.read_u32()
    tile_count = cursor.read_u32()
    tile_width = cursor.read_u16()
    tile_height = cursor.read_u16()
    cursor.skip(16)
    name = cursor.read_string()
    external = None
    data = None
    if flags & TilesetFlags.EXTERNAL_FILE:
        external = ExternalTileset(cursor.read_u32(), cursor.read_u32())
    if flags & TilesetFlags.EMBEDDED:
        size = cursor.read_u32()
        data = decompress(cursor.read_view(size))
    return Tileset(
        tileset_id, tile_count, tile_width, tile_height, name, external, data
    )


def _read_rect(cursor: ByteCursor) -> Rect:
    x = cursor.read_i32()
    y = cursor.read_i32()
    return Rect(x, y, cursor.read_u32(), cursor.read_u32())


def read_slice(cursor: ByteCursor, ctx: ChunkContext) -> Slice:
    count = cursor.read_u32()
    flags = cursor.read_u32()
    cursor.skip(4)
    name = cursor.read_string()
    keys = []
    for _ in range(count):
        frame = cursor.read_u32()
        bounds = _read_rect(cursor)
        center = _read_rect(cursor) if flags & SliceFlags.NINE_PATCH else None
        pivot = (
            Point(cursor.read_i32(), cursor.read_i32())
            if flags & SliceFlags.PIVOT
            else None
        )
        keys.append(SliceKey(frame, bounds, center, pivot))
    return Slice(name, flags, tuple(keys))


def read_layer(cursor: ByteCursor, ctx: ChunkContext) -> Layer:
    flags = cursor.read_u16()
    ltype = lookup_enum(tuple(LayerType), cursor.read_u16(), 'layer type')
    child_level = cursor.read_u16()
    cursor.skip(4)  # default width/height, ignored
    blend_mode = cursor.read_u16()
    opacity = cursor.read_u8()
    cursor.skip(3)
    name = cursor.read_string()
    tileset_index = cursor.read_u32() if ltype == LayerType.TILEMAP else None
    uuid = (
        cursor.read_bytes(16)
        if ctx.header['flags'] & HeaderFlags.LAYER_UUID
        else None
    )
    return Layer(
        flags, ltype, child_level, blend_mode, opacity, name, tileset_index, uuid
    )


def _check_length(ctx: ChunkContext, data: bytes, expected: int) -> bytes:
    if ctx.cfg.check_cel_length and len(data) != expected:
        raise CelLengthMismatch(expected, len(data))
    return data


def _payload_size(ctx: ChunkContext, prefix: int) -> int:
    if ctx.chunk.size < prefix:
        raise FormatError(
            f'cel chunk of {ctx.chunk.size} bytes is shorter than its {prefix}-byte'
            ' fixed part'
        )
    return ctx.chunk.size - prefix


def read_cel(cursor: ByteCursor, ctx: ChunkContext) -> Cel:
    layer_index = cursor.read_u16()
    x = cursor.read_i16()
    y = cursor.read_i16()
    opacity = cursor.read_u8()
    ctype = lookup_enum(tuple(CelType), cursor.read_u16(), 'cel type')
    cursor.skip(7)

    if ctype == CelType.LINKED:
        return Cel(layer_index, x, y, opacity, ctype, link=cursor.read_u16())

    width = cursor.read_u16()
    height = cursor.read_u16()

    if ctype == CelType.RAW:
        data = cursor.read_bytes(_payload_size(ctx, CEL_IMAGE_PREFIX))
        return Cel(layer_index, x, y, opacity, ctype, width, height, data)

    if ctype == CelType.COMPRESSED:
        data = decompress(cursor.read_view(_payload_size(ctx, CEL_IMAGE_PREFIX)))
        bpp = ctx.header['color_depth'] // 8
        data = _check_length(ctx, data, width * height * bpp)
        return Cel(layer_index, x, y, opacity, ctype, width, height, data)

    tilemap = TilemapInfo(
        bits_per_tile=cursor.read_u16(),
        tile_id_mask=cursor.read_u32(),
        x_flip_mask=cursor.read_u32(),
        y_flip_mask=cursor.read_u32(),
        rotation_mask=cursor.read_u32(),
    )
    cursor.skip(10)
    data = decompress(cursor.read_view(_payload_size(ctx, CEL_TILEMAP_PREFIX)))
    data = _check_length(ctx, data, width * height * tilemap.bits_per_tile // 8)
    return Cel(
        layer_index, x, y, opacity, ctype, width, height, data, tilemap=tilemap
    )


ChunkDecoder = Callable[[ByteCursor, ChunkContext], ChunkPayload]

CHUNK_DECODERS: Mapping[ChunkType, ChunkDecoder] = {
    ChunkType.LAYER: read_layer,
    ChunkType.CEL: read_cel,
    ChunkType.COLOR_PROFILE: read_color_profile,
    ChunkType.TAGS: read_tags,
    ChunkType.PALETTE: read_palette,
    ChunkType.SLICE: read_slice,
    ChunkType.TILESET: read_tileset,
}
