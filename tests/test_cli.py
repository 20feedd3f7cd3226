import aseprite_builder as ab
import pytest
from typer.testing import CliRunner

from spritecracker.cli import app

runner = CliRunner()


@pytest.fixture
def sprite(tmp_path):
    chunks = [
        ab.layer('body'),
        ab.layer('body_shadow', child_level=1),
        ab.tags([('walk', 0, 0, 2, 0, (0, 255, 0))]),
    ]
    path = tmp_path / 'hero.aseprite'
    path.write_bytes(ab.document([ab.frame(chunks)]))
    return path


def test_info(sprite):
    result = runner.invoke(app, ['info', str(sprite)])
    assert result.exit_code == 0, result.output
    assert '<aseprite name="hero"' in result.output
    assert '<layer id="1" name="body_shadow"' in result.output


def test_layers(sprite):
    result = runner.invoke(app, ['layers', str(sprite)])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ['body [normal]', '  body_shadow [normal]']


def test_layers_match(sprite):
    result = runner.invoke(app, ['layers', str(sprite), '--match', '{}_shadow'])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ['  body_shadow [normal]']


def test_tags(sprite):
    result = runner.invoke(app, ['tags', str(sprite)])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == 'walk: 0-0 Ping-pong #00ff00'


def test_broken_file(tmp_path):
    path = tmp_path / 'broken.aseprite'
    path.write_bytes(ab.document()[:50])
    result = runner.invoke(app, ['info', str(path)])
    assert result.exit_code == 1


def test_invalid_name_is_reported(tmp_path):
    path = tmp_path / 'mangled.aseprite'
    path.write_bytes(ab.document([ab.frame([ab.layer(b'\xff\xfe')])]))
    result = runner.invoke(app, ['layers', str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
