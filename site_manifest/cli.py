#!/usr/bin/env python3
"""
Command-line entry point of site_manifest.

Commands:
  generate  Build sitemap.xml / robots.txt and write them to the output directory
  render    Print the sitemap to stdout without writing anything
  config    Show the effective configuration

Global options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --profile NAME      Apply a named profile from the config (e.g. production)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

Options of generate:
  --output-dir DIR    Override output_dir
  --base-url URL      Override base_url
  --api-base URL      Override api_base
  --date YYYY-MM-DD   lastmod date of every entry (default: today)
  --no-robots         Skip robots.txt
  --no-remote         Skip the content API
  --no-embedded       Skip the bundled fallback movies
  --preview/--no-preview  Print the route overview after writing

Example:
  site-manifest --profile production generate --output-dir dist
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_manifest import __version__
from site_manifest.config import load_config
from site_manifest.engine import Engine
from site_manifest.errors import ArtifactWriteError
from site_manifest.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

DATE = click.DateTime(formats=["%Y-%m-%d"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _apply_overrides(cfg, **overrides):
    try:
        return cfg.with_overrides(**overrides)
    except ValidationError as e:
        print_error(f'Invalid option value: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='site-manifest, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON configuration file.'
)
@click.option(
    '--profile', '-p', 'profile',
    default=None,
    help='Named profile from the config to apply (e.g. production).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, profile, log_level, log_file, log_format):
    """site-manifest command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path, profile=profile)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('generate', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory for sitemap.xml and robots.txt'
)
@click.option('--base-url', 'base_url', default=None, help='Public origin of the site')
@click.option('--api-base', 'api_base', default=None, help='Origin of the content API')
@click.option('--date', 'run_date', type=DATE, default=None, help='lastmod date (YYYY-MM-DD)')
@click.option('--no-robots', is_flag=True, help='Do not write robots.txt')
@click.option('--no-remote', is_flag=True, help='Do not query the content API')
@click.option('--no-embedded', is_flag=True, help='Do not scan the bundled fallback movies')
@click.option('--preview/--no-preview', default=True, show_default=True,
              help='Print an overview of the generated routes')
@click.pass_context
def generate(ctx, output_dir, base_url, api_base, run_date, no_robots, no_remote, no_embedded,
             preview):
    """Generate sitemap.xml and robots.txt."""
    cfg = _apply_overrides(
        ctx.obj['config'],
        output_dir=output_dir,
        base_url=base_url,
        api_base=api_base,
        include_robots=False if no_robots else None,
        include_remote_routes=False if no_remote else None,
        include_embedded_routes=False if no_embedded else None,
    )
    engine = Engine(cfg, today=run_date.date() if run_date else None)
    try:
        result = engine.generate()
    except ArtifactWriteError as e:
        print_error(f'Error generating sitemap: {e}')

    click.echo(f'Total URLs: {result.summary()}')
    for path in result.written:
        click.echo(f'Written: {path}')
    if preview:
        click.echo('\n'.join(engine.preview(result)))


@cli.command('render', context_settings=CONTEXT_SETTINGS)
@click.option('--date', 'run_date', type=DATE, default=None, help='lastmod date (YYYY-MM-DD)')
@click.pass_context
def render(ctx, run_date):
    """Print the sitemap XML without writing files."""
    engine = Engine(ctx.obj['config'], today=run_date.date() if run_date else None)
    result = engine.build()
    click.echo(result.sitemap, nl=False)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
