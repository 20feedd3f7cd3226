from collections.abc import Iterator
from dataclasses import dataclass

from spritecracker.aseprite.schema import (
    CelType,
    ColorProfileType,
    LayerFlags,
    LayerType,
    LoopDirection,
)


@dataclass(frozen=True, slots=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class ColorProfile:
    type: ColorProfileType
    flags: int
    gamma: float
    icc: bytes | None = None


@dataclass(frozen=True, slots=True)
class Color:
    red: int
    green: int
    blue: int
    alpha: int
    name: str = 'none'

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)


@dataclass(frozen=True, slots=True)
class Palette:
    palette_size: int
    first_color: int
    last_color: int
    colors: tuple[Color, ...]
    # only recorded for indexed (8bpp) documents
    transparent_index: int | None = None


@dataclass(frozen=True, slots=True)
class Layer:
    flags: int
    type: LayerType
    child_level: int
    blend_mode: int
    opacity: int
    name: str
    tileset_index: int | None = None
    uuid: bytes | None = None

    @property
    def visible(self) -> bool:
        return bool(self.flags & LayerFlags.VISIBLE)


@dataclass(frozen=True, slots=True)
class TilemapInfo:
    bits_per_tile: int
    tile_id_mask: int
    x_flip_mask: int
    y_flip_mask: int
    rotation_mask: int


@dataclass(frozen=True, slots=True)
class Cel:
    layer_index: int
    x: int
    y: int
    opacity: int
    type: CelType
    width: int = 0
    height: int = 0
    data: bytes = b''
    link: int | None = None
    tilemap: TilemapInfo | None = None

    @property
    def is_linked(self) -> bool:
        return self.type == CelType.LINKED


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    from_frame: int
    to_frame: int
    direction: LoopDirection
    repeat: int
    color: tuple[int, int, int]

    @property
    def color_hex(self) -> str:
        return bytes(self.color).hex()

    @property
    def frames(self) -> range:
        return range(self.from_frame, self.to_frame + 1)


@dataclass(frozen=True, slots=True)
class ExternalTileset:
    file_id: int
    tileset_id: int


@dataclass(frozen=True, slots=True)
class Tileset:
    id: int
    tile_count: int
    tile_width: int
    tile_height: int
    name: str
    external: ExternalTileset | None = None
    data: bytes | None = None


@dataclass(frozen=True, slots=True)
class SliceKey:
    frame: int
    bounds: Rect
    center: Rect | None = None
    pivot: Point | None = None


@dataclass(frozen=True, slots=True)
class Slice:
    name: str
    flags: int
    keys: tuple[SliceKey, ...]


@dataclass(frozen=True, slots=True)
class TagList:
    tags: tuple[Tag, ...]


@dataclass(frozen=True, slots=True)
class Frame:
    size: int
    duration: int
    num_chunks: int
    cels: tuple[Cel, ...] = ()

    def cels_for(self, layer_index: int) -> Iterator[Cel]:
        return (cel for cel in self.cels if cel.layer_index == layer_index)


@dataclass(frozen=True, slots=True)
class Grid:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True, slots=True)
class Document:
    file_size: int
    num_frames: int
    width: int
    height: int
    color_depth: int
    num_colors: int
    transparent_index: int
    pixel_ratio: str
    flags: int = 0
    speed: int = 0
    grid: Grid | None = None
    color_profile: ColorProfile | None = None
    palette: Palette | None = None
    layers: tuple[Layer, ...] = ()
    tags: tuple[Tag, ...] = ()
    slices: tuple[Slice, ...] = ()
    tilesets: tuple[Tileset, ...] = ()
    frames: tuple[Frame, ...] = ()
    name: str | None = None

    @property
    def bytes_per_pixel(self) -> int:
        return self.color_depth // 8

    def __repr__(self) -> str:
        return (
            f'Document<{self.name or "?"}>[{self.width}x{self.height}'
            f' {self.color_depth}bpp, frames={len(self.frames)},'
            f' layers={len(self.layers)}]'
        )


# closed set of values a chunk decoder may produce
ChunkPayload = ColorProfile | Palette | Layer | Cel | TagList | Slice | Tileset
