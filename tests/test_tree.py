import io

import aseprite_builder as ab

from spritecracker import tree
from spritecracker.aseprite.preset import aseprite


def sample():
    chunks = [
        ab.color_profile(),
        ab.palette([(0, 0, 0, 0)]),
        ab.layer('body'),
        ab.layer('body_shadow'),
        ab.layer('hat_shadow', child_level=1),
        ab.tags([('walk', 0, 1, 0, 0, (255, 0, 0))]),
        ab.slice_('hitbox', [(0, 0, 0, 4, 4)]),
        ab.raw_cel(0, 1, 1, b'\x00' * 4),
    ]
    return aseprite.parse(ab.document([ab.frame(chunks), ab.frame()]), name='hero')


def test_findall_with_pattern():
    doc = sample()
    found = [layer.name for layer in tree.findall('{}_shadow', doc.layers)]
    assert found == ['body_shadow', 'hat_shadow']


def test_find():
    doc = sample()
    assert tree.find('walk', doc.tags).from_frame == 0
    assert tree.find('missing', doc.slices) is None
    assert tree.find('anything', None) is None


def test_preset_pass_through():
    doc = sample()
    assert aseprite.find('hit{}', doc.slices).name == 'hitbox'


def test_render():
    doc = sample()
    stream = io.StringIO()
    tree.render(doc, stream=stream)
    text = stream.getvalue()

    assert text.startswith('<aseprite name="hero" size="32x32" depth="32"')
    assert '<profile type="sRGB" gamma="0.0" />' in text
    assert '<layer id="2" name="hat_shadow" type="normal" level="1"' in text
    assert (
        '<tag name="walk" frames="0-1" direction="Forward" color="#ff0000" />'
    ) in text
    assert (
        '<cel layer="0" type="raw" x="0" y="0" opacity="255" size="1x1" bytes="4" />'
    ) in text
    assert '<frame id="1" duration="100" chunks="0" />' in text
    assert text.rstrip().endswith('</aseprite>')
    assert tree.renders(doc) == text
