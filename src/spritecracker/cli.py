import glob
import itertools
import logging
from collections.abc import Iterable, Iterator

import typer

from spritecracker.aseprite.errors import ParseError
from spritecracker.aseprite.model import Document
from spritecracker.aseprite.preset import Preset, aseprite

app = typer.Typer()

state: dict[str, Preset] = {'preset': aseprite}


def expand(patterns: Iterable[str]) -> list[str]:
    return sorted(set(itertools.chain.from_iterable(glob.iglob(p) for p in patterns)))


def load_all(files: Iterable[str]) -> Iterator[Document]:
    preset = state['preset']
    for filename in expand(files):
        try:
            yield preset.load(filename)
        except ParseError as exc:
            logging.error(f'{filename}: {exc}')
            raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Log debug output'),
    legacy_tags: bool = typer.Option(
        False, '--legacy-tags', help='Read tags with the 3-direction layout'
    ),
    ignore_links: bool = typer.Option(
        False, '--ignore-links', help='Leave unresolvable linked cels empty'
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )
    state['preset'] = aseprite(
        tags_revision='legacy' if legacy_tags else 'current',
        link_errors='ignore' if ignore_links else 'strict',
    )


@app.command()
def info(
    files: list[str] = typer.Argument(..., help='*.aseprite files to read from'),
) -> None:
    for document in load_all(files):
        typer.echo(aseprite.renders(document), nl=False)


@app.command()
def layers(
    filename: str = typer.Argument(..., help='*.aseprite file to read from'),
    match: str | None = typer.Option(
        None, '--match', '-m', help='Layer name pattern, e.g. "{}_shadow"'
    ),
) -> None:
    for document in load_all([filename]):
        found = aseprite.findall(match, document.layers) if match else document.layers
        for layer in found:
            indent = '  ' * layer.child_level
            typer.echo(f'{indent}{layer.name} [{layer.type.name.lower()}]')


@app.command()
def tags(
    filename: str = typer.Argument(..., help='*.aseprite file to read from'),
) -> None:
    for document in load_all([filename]):
        for tag in document.tags:
            typer.echo(
                f'{tag.name}: {tag.from_frame}-{tag.to_frame}'
                f' {tag.direction} #{tag.color_hex}'
            )


if __name__ == '__main__':
    app()
