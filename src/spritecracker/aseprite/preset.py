import logging
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Self

from spritecracker import tree
from spritecracker.aseprite.document import parse_document, parse_path
from spritecracker.aseprite.headers import is_aseprite


@dataclass(frozen=True)
class DecoderSettings:
    tags_revision: Literal['current', 'legacy'] = 'current'
    keep_icc: bool = True
    link_errors: Literal['strict', 'ignore'] = 'strict'
    verify_magic: bool = True
    check_cel_length: bool = True
    logger: logging.Logger = field(
        default=logging.getLogger('spritecracker'),
        compare=False,
    )

    def __post_init__(self) -> None:
        if self.tags_revision not in ('current', 'legacy'):
            raise ValueError(f'unknown tags revision: {self.tags_revision}')
        if self.link_errors not in ('strict', 'ignore'):
            raise ValueError(f'unknown link error policy: {self.link_errors}')


@dataclass(frozen=True)
class _DefaultOverride:
    def __call__(self, **kwargs: Any) -> Self:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Preset(DecoderSettings, _DefaultOverride):
    parse = parse_document
    load = parse_path

    # static pass through
    is_aseprite = staticmethod(is_aseprite)
    find = staticmethod(tree.find)
    findall = staticmethod(tree.findall)
    render = staticmethod(tree.render)
    renders = staticmethod(tree.renders)


aseprite = Preset()
