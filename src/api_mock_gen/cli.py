"""CLI entry point for api-mock-gen."""

from pathlib import Path

import click

from api_mock_gen.generator.handlers import build_mock_plan, render_module
from api_mock_gen.generator.synthesis import ValueSynthesizer
from api_mock_gen.logging_setup import configure_logging
from api_mock_gen.parser.base import MockOptions
from api_mock_gen.parser.swagger import (
    DocumentError,
    collect_operations,
    dereference,
    load_document,
    server_url,
)

# Sentinel for a bare --base-url: use the document's own server URL.
SERVER_URL = "\0server"


def _split(value: str | None) -> list[str]:
    """Split a comma separated option value, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load(spec_path: Path) -> dict:
    try:
        return dereference(load_document(spec_path))
    except DocumentError as e:
        raise click.ClickException(str(e)) from e


def _output_file(output: Path, typescript: bool) -> Path:
    """Resolve -o to a file path; directories get a handlers.js/.ts file."""
    if output.is_dir() or not output.suffix:
        return output / ("handlers.ts" if typescript else "handlers.js")
    return output


@click.group(context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "API_MOCK_GEN"})
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Mock Gen — generate deterministic msw mock handlers from OpenAPI docs."""
    configure_logging(verbose)


@main.command()
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file or directory. Defaults to stdout.")
@click.option("--base-url", default=None, is_flag=False, flag_value=SERVER_URL, help="Base URL for handlers. Without a value, the document's server URL is used.")
@click.option("--includes", default=None, help="Comma separated keywords; only matching 'verb path' operations are kept.")
@click.option("--excludes", default=None, help="Comma separated keywords; matching 'verb path' operations are dropped.")
@click.option("--codes", default=None, help="Comma separated status codes to keep, e.g. 200,404.")
@click.option("--typescript", is_flag=True, help="Emit TypeScript annotations.")
def generate(spec_path: Path, output: Path | None, base_url: str | None, includes: str | None,
             excludes: str | None, codes: str | None, typescript: bool):
    """Generate an msw handlers module from an OpenAPI document."""
    click.echo(f"Parsing {spec_path}...", err=True)
    document = _load(spec_path)

    if base_url == SERVER_URL:
        base_url = server_url(document)

    options = MockOptions(
        base_url=base_url or "",
        typescript=typescript,
        includes=_split(includes),
        excludes=_split(excludes),
        codes=_split(codes),
    )
    operations = collect_operations(document, options)
    click.echo(f"Found {len(operations)} operations.", err=True)

    synthesizer = ValueSynthesizer()
    source = render_module(build_mock_plan(operations, synthesizer), options)
    if synthesizer.cycles:
        click.echo(f"Replaced {len(synthesizer.cycles)} recursive schema reference(s) with null.", err=True)

    if output is None:
        click.echo(source, nl=False)
        return

    file_path = _output_file(output, typescript)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(source, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot write {file_path}: {e}") from e
    click.echo(f"Mock handlers saved to {file_path}", err=True)


@main.command(name="list")
@click.argument("spec_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--includes", default=None, help="Comma separated keywords to keep.")
@click.option("--excludes", default=None, help="Comma separated keywords to drop.")
@click.option("--codes", default=None, help="Comma separated status codes to keep.")
def list_operations(spec_path: Path, includes: str | None, excludes: str | None, codes: str | None):
    """List the operations that would be mocked."""
    options = MockOptions(includes=_split(includes), excludes=_split(excludes), codes=_split(codes))
    operations = collect_operations(_load(spec_path), options)
    for op in operations:
        codes_text = ", ".join(r.code for r in op.response)
        click.echo(f"{op.verb.upper():<7} {op.path} -> {codes_text}")
    click.echo(f"{len(operations)} operations.", err=True)
