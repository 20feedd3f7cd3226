import logging
from collections.abc import Iterator, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from spritecracker.aseprite.builder import FrameBuilder
from spritecracker.aseprite.errors import UnresolvedCelLink
from spritecracker.aseprite.model import Cel, Frame

if TYPE_CHECKING:
    from spritecracker.aseprite.preset import DecoderSettings


def find_source(
    frames: Sequence[FrameBuilder],
    frame_index: int,
    cel: Cel,
) -> Cel | None:
    """Locate the cel a linked cel borrows its content from.

    The source lives in an earlier (or the same) frame on the same layer.
    A source that is itself linked is followed back until a cel with
    content is reached; each step must go to a strictly earlier frame.
    """
    current, link = frame_index, cel.link
    while link is not None:
        if link > current or link >= len(frames):
            return None
        candidates = [
            src for src in frames[link].cels if src.layer_index == cel.layer_index
        ]
        source = next((src for src in candidates if not src.is_linked), None)
        if source is not None:
            return source
        if not candidates or link == current:
            return None
        current, link = link, candidates[0].link
    return None


def resolve_cel(
    cfg: 'DecoderSettings',
    frames: Sequence[FrameBuilder],
    frame_index: int,
    cel: Cel,
) -> Cel:
    if not cel.is_linked:
        return cel
    source = find_source(frames, frame_index, cel)
    if source is None:
        exc = UnresolvedCelLink(frame_index, cel.layer_index, cel.link)
        if cfg.link_errors == 'strict':
            raise exc
        getattr(cfg, 'logger', logging).warning(f'{exc}, leaving it empty')
        return replace(cel, width=0, height=0, data=b'')
    # payload is shared with the source, not copied
    return replace(cel, width=source.width, height=source.height, data=source.data)


def resolve_links(
    cfg: 'DecoderSettings',
    frames: Sequence[FrameBuilder],
) -> tuple[Frame, ...]:
    def resolved(idx: int, frame: FrameBuilder) -> Iterator[Cel]:
        for cel in frame.cels:
            yield resolve_cel(cfg, frames, idx, cel)

    return tuple(
        replace(frame.build(), cels=tuple(resolved(idx, frame)))
        for idx, frame in enumerate(frames)
    )
