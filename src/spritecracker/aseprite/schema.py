from enum import IntEnum, StrEnum

FILE_MAGIC = 0xA5E0
FRAME_MAGIC = 0xF1FA


class ChunkType(IntEnum):
    OLD_PALETTE_256 = 0x0004
    OLD_PALETTE_64 = 0x0011
    LAYER = 0x2004
    CEL = 0x2005
    CEL_EXTRA = 0x2006
    COLOR_PROFILE = 0x2007
    MASK = 0x2016
    PATH = 0x2017
    TAGS = 0x2018
    PALETTE = 0x2019
    USER_DATA = 0x2020
    SLICE = 0x2022
    TILESET = 0x2023

    @classmethod
    def lookup(cls, code: int) -> 'ChunkType | int':
        try:
            return cls(code)
        except ValueError:
            return code


# recognized, but their content is not decoded
DEPRECATED = frozenset(
    {
        ChunkType.OLD_PALETTE_256,
        ChunkType.OLD_PALETTE_64,
        ChunkType.MASK,
        ChunkType.PATH,
        ChunkType.USER_DATA,
    }
)

# known chunks this decoder skips without a warning
SKIPPED = DEPRECATED | {ChunkType.CEL_EXTRA}


class LayerType(IntEnum):
    NORMAL = 0
    GROUP = 1
    TILEMAP = 2


class CelType(IntEnum):
    RAW = 0
    LINKED = 1
    COMPRESSED = 2
    TILEMAP = 3


class LoopDirection(StrEnum):
    FORWARD = 'Forward'
    REVERSE = 'Reverse'
    PING_PONG = 'Ping-pong'
    PING_PONG_REVERSE = 'Ping-pong Reverse'


LOOP_DIRECTIONS = {
    'legacy': (
        LoopDirection.FORWARD,
        LoopDirection.REVERSE,
        LoopDirection.PING_PONG,
    ),
    'current': tuple(LoopDirection),
}


class ColorProfileType(StrEnum):
    NONE = 'None'
    SRGB = 'sRGB'
    ICC = 'ICC'


COLOR_PROFILE_TYPES = tuple(ColorProfileType)


class LayerFlags:
    VISIBLE = 1


class HeaderFlags:
    LAYER_OPACITY_VALID = 1
    GROUP_OPACITY_VALID = 2
    LAYER_UUID = 4


class TilesetFlags:
    EXTERNAL_FILE = 1
    EMBEDDED = 2


class SliceFlags:
    NINE_PATCH = 1
    PIVOT = 2


class PaletteEntryFlags:
    HAS_NAME = 1
