from dataclasses import dataclass, field

from spritecracker.aseprite.headers import FileHeader, FrameHeader
from spritecracker.aseprite.model import (
    Cel,
    ChunkPayload,
    ColorProfile,
    Document,
    Frame,
    Grid,
    Layer,
    Palette,
    Slice,
    Tag,
    TagList,
    Tileset,
)


@dataclass
class FrameBuilder:
    header: FrameHeader
    cels: list[Cel] = field(default_factory=list)

    def build(self) -> Frame:
        return Frame(
            size=self.header['size'],
            duration=self.header['duration'],
            num_chunks=self.header.num_chunks,
            cels=tuple(self.cels),
        )


@dataclass
class DocumentBuilder:
    """Mutable accumulator threaded through the decode pipeline."""

    header: FileHeader
    name: str | None = None
    color_profile: ColorProfile | None = None
    palette: Palette | None = None
    layers: list[Layer] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    slices: list[Slice] = field(default_factory=list)
    tilesets: list[Tileset] = field(default_factory=list)
    frames: list[FrameBuilder] = field(default_factory=list)

    def begin_frame(self, header: FrameHeader) -> FrameBuilder:
        frame = FrameBuilder(header)
        self.frames.append(frame)
        return frame

    def add(self, payload: ChunkPayload) -> None:
        match payload:
            case Cel():
                self.frames[-1].cels.append(payload)
            case Layer():
                self.layers.append(payload)
            case TagList(tags):
                self.tags.extend(tags)
            case Palette():
                # last palette chunk wins
                self.palette = payload
            case ColorProfile():
                self.color_profile = payload
            case Slice():
                self.slices.append(payload)
            case Tileset():
                self.tilesets.append(payload)
            case _:
                raise TypeError(f'unexpected chunk payload: {payload!r}')

    def build(self, frames: tuple[Frame, ...] | None = None) -> Document:
        header = self.header
        if frames is None:
            frames = tuple(frame.build() for frame in self.frames)
        return Document(
            file_size=header['file_size'],
            num_frames=header['num_frames'],
            width=header['width'],
            height=header['height'],
            color_depth=header['color_depth'],
            num_colors=header['num_colors'],
            transparent_index=header['transparent_index'],
            pixel_ratio=header.pixel_ratio,
            flags=header['flags'],
            speed=header['speed'],
            grid=Grid(
                header['grid_x'],
                header['grid_y'],
                header['grid_width'],
                header['grid_height'],
            ),
            color_profile=self.color_profile,
            palette=self.palette,
            layers=tuple(self.layers),
            tags=tuple(self.tags),
            slices=tuple(self.slices),
            tilesets=tuple(self.tilesets),
            frames=frames,
            name=self.name,
        )
