"""CLI entry point for gumwood."""

import json
import logging
import sys
from pathlib import Path

import click

from gumwood.config import GumwoodConfig, load_config, parse_front_matter, parse_headers
from gumwood.errors import GumwoodError
from gumwood.parser.introspection import build_schema
from gumwood.pipeline import RunOptions, run
from gumwood.source import fetch_introspection, read_json_file, read_schema_file, read_stdin

logger = logging.getLogger(__name__)


def _read_source(config: GumwoodConfig) -> bytes:
    """Fetch raw introspection bytes from whichever source is configured."""
    if config.url:
        return fetch_introspection(config.url, config.headers, config.timeout)
    if config.json_path:
        return read_json_file(config.json_path)
    if config.schema_path:
        return read_schema_file(config.schema_path)
    return read_stdin(sys.stdin.buffer)


def _write_units(units: dict[str, str], out_dir: Path) -> None:
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise click.ClickException(f"cannot create {out_dir}: {exc}") from exc
    for unit, markdown in units.items():
        file_path = out_dir / f"{unit}.md"
        try:
            file_path.write_text(markdown, encoding="utf-8")
        except OSError as exc:
            raise click.ClickException(f"cannot write {file_path}: {exc}") from exc
        logger.info("Wrote %s", file_path)
        click.echo(f"  Created {file_path}", err=True)
    click.echo(f"Generated {len(units)} files in {out_dir}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    """Convert a GraphQL schema to Markdown."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option("-u", "--url", default=None, help="GraphQL endpoint to introspect.")
@click.option("-j", "--json", "json_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="File containing an introspection response.")
@click.option("-s", "--schema", "schema_path", default=None, type=click.Path(dir_okay=False, path_type=Path), help="GraphQL schema file (not supported yet).")
@click.option("-H", "--header", "headers", multiple=True, help="Header to send with --url, as name:value. Repeatable.")
@click.option("-o", "--out-dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Write one file per entity kind into this directory.")
@click.option("-f", "--front-matter", default=None, help="Front matter for output files, as key1:value1;key2:value2.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file with default options.")
@click.option("--introspection-types/--no-introspection-types", default=None, help="Include __-prefixed introspection types.")
@click.option("--directives/--no-directives", default=None, help="Add a directives section.")
@click.option("--timeout", default=None, type=float, help="Seconds to wait for --url.")
def generate(
    url: str | None,
    json_path: Path | None,
    schema_path: Path | None,
    headers: tuple[str, ...],
    out_dir: Path | None,
    front_matter: str | None,
    config_path: Path | None,
    introspection_types: bool | None,
    directives: bool | None,
    timeout: float | None,
):
    """Generate Markdown from a GraphQL schema.

    Reads from --url, --json, or stdin when no source is given. Without
    --out-dir the whole document goes to stdout.
    """
    try:
        config = load_config(config_path).merged(
            url=url,
            json_path=json_path,
            schema_path=schema_path,
            headers=parse_headers(headers),
            front_matter=parse_front_matter(front_matter),
            out_dir=out_dir,
            timeout=timeout,
            include_introspection_types=introspection_types,
            include_directives=directives,
        )
        raw = _read_source(config)
        options = RunOptions(
            front_matter=config.front_matter or None,
            split_by_kind=config.out_dir is not None,
            include_introspection_types=config.include_introspection_types,
            include_directives=config.include_directives,
        )
        result = run(raw, options)
    except GumwoodError as exc:
        raise click.ClickException(str(exc)) from exc

    if config.out_dir is not None:
        _write_units(result, config.out_dir)
    else:
        click.echo(result, nl=False)


@main.command()
@click.argument("url")
@click.option("-H", "--header", "headers", multiple=True, help="Header to send, as name:value. Repeatable.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Save the response here instead of printing it.")
@click.option("--timeout", default=None, type=float, help="Seconds to wait for the server.")
def introspect(url: str, headers: tuple[str, ...], output: Path | None, timeout: float | None):
    """Save the introspection response of URL for later --json runs."""
    try:
        raw = fetch_introspection(url, parse_headers(headers), timeout)
        schema = build_schema(raw)
    except GumwoodError as exc:
        raise click.ClickException(str(exc)) from exc

    pretty = json.dumps(json.loads(raw), indent=2) + "\n"
    if output is None:
        click.echo(pretty, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(pretty, encoding="utf-8")
    click.echo(f"Saved {len(schema.types)} types to {output}", err=True)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
