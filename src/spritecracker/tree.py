import io
import sys
from collections.abc import Iterable, Iterator
from typing import IO, Any, Protocol, TypeVar

from parse import parse  # type: ignore[import-untyped]

from spritecracker.aseprite.model import Cel, Document, Frame


class Named(Protocol):
    @property
    def name(self) -> str: ...


N = TypeVar('N', bound=Named)


def findall(pattern: str, items: Iterable[N] | None) -> Iterator[N]:
    if not items:
        return
    for item in items:
        if parse(pattern, item.name, evaluate_result=False):
            yield item


def find(pattern: str, items: Iterable[N] | None) -> N | None:
    return next(findall(pattern, items), None)


def _attribs(**attribs: Any) -> str:
    return ''.join(
        f' {key}="{value}"' for key, value in attribs.items() if value is not None
    )


def _cel_attribs(cel: Cel) -> str:
    return _attribs(
        layer=cel.layer_index,
        type=cel.type.name.lower(),
        x=cel.x,
        y=cel.y,
        opacity=cel.opacity,
        size=f'{cel.width}x{cel.height}',
        link=cel.link,
        bytes=len(cel.data),
    )


def _render_frame(idx: int, frame: Frame, indent: str, stream: IO[str]) -> None:
    attribs = _attribs(id=idx, duration=frame.duration, chunks=frame.num_chunks)
    if not frame.cels:
        print(f'{indent}<frame{attribs} />', file=stream)
        return
    print(f'{indent}<frame{attribs}>', file=stream)
    for cel in frame.cels:
        print(f'{indent}    <cel{_cel_attribs(cel)} />', file=stream)
    print(f'{indent}</frame>', file=stream)


def render(document: Document, stream: IO[str] = sys.stdout) -> None:
    header = _attribs(
        name=document.name,
        size=f'{document.width}x{document.height}',
        depth=document.color_depth,
        ratio=document.pixel_ratio,
        frames=document.num_frames,
        filesize=document.file_size,
    )
    print(f'<aseprite{header}>', file=stream)

    if document.color_profile:
        profile = document.color_profile
        print(
            f'    <profile{_attribs(type=profile.type, gamma=profile.gamma)} />',
            file=stream,
        )
    if document.palette:
        palette = document.palette
        attribs = _attribs(
            colors=palette.palette_size,
            first=palette.first_color,
            last=palette.last_color,
            transparent=palette.transparent_index,
        )
        print(f'    <palette{attribs} />', file=stream)
    for idx, layer in enumerate(document.layers):
        attribs = _attribs(
            id=idx,
            name=layer.name,
            type=layer.type.name.lower(),
            level=layer.child_level,
            blend=layer.blend_mode,
            opacity=layer.opacity,
            tileset=layer.tileset_index,
        )
        print(f'    <layer{attribs} />', file=stream)
    for tag in document.tags:
        attribs = _attribs(
            name=tag.name,
            frames=f'{tag.from_frame}-{tag.to_frame}',
            direction=tag.direction,
            repeat=tag.repeat or None,
            color=f'#{tag.color_hex}',
        )
        print(f'    <tag{attribs} />', file=stream)
    for slc in document.slices:
        attribs = _attribs(name=slc.name, flags=slc.flags, keys=len(slc.keys))
        print(f'    <slice{attribs} />', file=stream)
    for tileset in document.tilesets:
        attribs = _attribs(
            id=tileset.id,
            name=tileset.name,
            tiles=tileset.tile_count,
            size=f'{tileset.tile_width}x{tileset.tile_height}',
        )
        print(f'    <tileset{attribs} />', file=stream)
    for idx, frame in enumerate(document.frames):
        _render_frame(idx, frame, '    ', stream)

    print('</aseprite>', file=stream)


def renders(document: Document) -> str:
    with io.StringIO() as stream:
        render(document, stream=stream)
        return stream.getvalue()
