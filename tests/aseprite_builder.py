"""Helpers assembling synthetic .aseprite buffers for the tests."""

import struct
import zlib
from collections.abc import Sequence

LAYER = 0x2004
CEL = 0x2005
COLOR_PROFILE = 0x2007
TAGS = 0x2018
PALETTE = 0x2019
SLICE = 0x2022
TILESET = 0x2023

HEADER = struct.Struct('<IHHHHHIHIIB3xHBBhhHH84x')
FRAME_HEADER = struct.Struct('<IHHH2xI')
CEL_PREFIX = struct.Struct('<HhhBH7x')
TILE_MASKS = (0x1FFFFFFF, 0x20000000, 0x40000000, 0x80000000)


def string(text: str | bytes) -> bytes:
    data = text if isinstance(text, bytes) else text.encode('utf-8')
    return struct.pack('<H', len(data)) + data


def chunk(ctype: int, body: bytes, size: int | None = None) -> bytes:
    return struct.pack('<IH', len(body) + 6 if size is None else size, ctype) + body


def frame(
    chunks: Sequence[bytes] = (),
    duration: int = 100,
    magic: int = 0xF1FA,
    legacy: bool = False,
) -> bytes:
    body = b''.join(chunks)
    count = len(chunks)
    return (
        FRAME_HEADER.pack(
            len(body) + FRAME_HEADER.size,
            magic,
            count,
            duration,
            0 if legacy else count,
        )
        + body
    )


def document(
    frames: Sequence[bytes] = (),
    width: int = 32,
    height: int = 32,
    color_depth: int = 32,
    flags: int = 1,
    transparent: int = 0,
    num_colors: int = 0,
    pixel_ratio: tuple[int, int] = (1, 1),
    grid: tuple[int, int, int, int] = (0, 0, 16, 16),
    magic: int = 0xA5E0,
    num_frames: int | None = None,
) -> bytes:
    body = b''.join(frames)
    header = HEADER.pack(
        HEADER.size + len(body),
        magic,
        len(frames) if num_frames is None else num_frames,
        width,
        height,
        color_depth,
        flags,
        100,
        0,
        0,
        transparent,
        num_colors,
        *pixel_ratio,
        *grid,
    )
    return header + body


def layer(
    name: str | bytes,
    ltype: int = 0,
    flags: int = 3,
    child_level: int = 0,
    blend_mode: int = 0,
    opacity: int = 255,
    tileset: int | None = None,
    uuid: bytes = b'',
) -> bytes:
    body = struct.pack(
        '<HHHHHHB3x', flags, ltype, child_level, 0, 0, blend_mode, opacity
    ) + string(name)
    if tileset is not None:
        body += struct.pack('<I', tileset)
    return chunk(LAYER, body + uuid)


def raw_cel(
    layer_index: int,
    width: int,
    height: int,
    data: bytes,
    x: int = 0,
    y: int = 0,
    opacity: int = 255,
) -> bytes:
    body = CEL_PREFIX.pack(layer_index, x, y, opacity, 0)
    return chunk(CEL, body + struct.pack('<HH', width, height) + data)


def compressed_cel(
    layer_index: int,
    width: int,
    height: int,
    data: bytes,
    x: int = 0,
    y: int = 0,
    opacity: int = 255,
) -> bytes:
    body = CEL_PREFIX.pack(layer_index, x, y, opacity, 2)
    body += struct.pack('<HH', width, height) + zlib.compress(data)
    return chunk(CEL, body)


def linked_cel(layer_index: int, link: int, x: int = 0, y: int = 0) -> bytes:
    body = CEL_PREFIX.pack(layer_index, x, y, 255, 1) + struct.pack('<H', link)
    return chunk(CEL, body)


def tilemap_cel(
    layer_index: int,
    width: int,
    height: int,
    tiles: Sequence[int],
    masks: tuple[int, int, int, int] = TILE_MASKS,
) -> bytes:
    body = CEL_PREFIX.pack(layer_index, 0, 0, 255, 3)
    body += struct.pack('<HHHIIII10x', width, height, 32, *masks)
    body += zlib.compress(struct.pack(f'<{len(tiles)}I', *tiles))
    return chunk(CEL, body)


def color_profile(
    ptype: int = 1,
    flags: int = 0,
    gamma: float = 0.0,
    icc: bytes | None = None,
) -> bytes:
    body = struct.pack('<HHi8x', ptype, flags, int(gamma * 0x10000))
    if icc is not None:
        body += struct.pack('<I', len(icc)) + icc
    return chunk(COLOR_PROFILE, body)


def tags(
    entries: Sequence[tuple[str, int, int, int, int, tuple[int, int, int]]],
    legacy: bool = False,
) -> bytes:
    body = struct.pack('<H8x', len(entries))
    for name, from_frame, to_frame, direction, repeat, color in entries:
        if legacy:
            body += struct.pack('<HHB8x3Bx', from_frame, to_frame, direction, *color)
        else:
            body += struct.pack(
                '<HHBH6x3Bx', from_frame, to_frame, direction, repeat, *color
            )
        body += string(name)
    return chunk(TAGS, body)


def palette(
    colors: Sequence[tuple[int, int, int, int] | tuple[int, int, int, int, str]],
    first: int = 0,
) -> bytes:
    last = first + len(colors) - 1 if colors else 0
    body = struct.pack('<III8x', len(colors), first, last)
    for color in colors:
        rgba, name = color[:4], color[4:]
        body += struct.pack('<H4B', 1 if name else 0, *rgba)
        if name:
            body += string(name[0])
    return chunk(PALETTE, body)


def tileset(
    tileset_id: int,
    name: str,
    tile_count: int = 1,
    tile_size: tuple[int, int] = (8, 8),
    external: tuple[int, int] | None = None,
    data: bytes | None = None,
) -> bytes:
    flags = (1 if external else 0) | (2 if data is not None else 0)
    body = struct.pack('<IIIHH16x', tileset_id, flags, tile_count, *tile_size)
    body += string(name)
    if external:
        body += struct.pack('<II', *external)
    if data is not None:
        packed = zlib.compress(data)
        body += struct.pack('<I', len(packed)) + packed
    return chunk(TILESET, body)


def slice_(
    name: str,
    keys: Sequence[tuple[int, int, int, int, int]],
    center: tuple[int, int, int, int] | None = None,
    pivot: tuple[int, int] | None = None,
) -> bytes:
    flags = (1 if center else 0) | (2 if pivot else 0)
    body = struct.pack('<II4x', len(keys), flags) + string(name)
    for key in keys:
        body += struct.pack('<IiiII', *key)
        if center:
            body += struct.pack('<iiII', *center)
        if pivot:
            body += struct.pack('<ii', *pivot)
    return chunk(SLICE, body)
