# === FILE: site_walker/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the SiteWalker crawler.

Commands:
  crawl [URL]...  Crawl breadth-first from the given seed URLs
  outline URL     Print the tag outline of a single page
  config          Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --concurrency, -k INT  Maximum fetches in flight (default 20)
  --max-urls INT         Stop scheduling after this many URLs
  --max-depth INT        Do not follow links deeper than this
  --json PATH            Save a JSON report
  --html PATH            Save an HTML report
  --template DIR         Directory with a custom report.html.j2

Visited URLs are printed to stdout as their fetch begins; fetch failures are
logged to stderr and never change the exit code.

Example:
  site-walker crawl https://example.com/ --concurrency 5 --json crawl.json
"""
import sys
import asyncio
import json
from pathlib import Path

import click
from jinja2 import TemplateError

from site_walker import __version__
from site_walker.config import load_config
from site_walker.crawler.errors import FetchError
from site_walker.engine import fetch_outline, start_crawl
from site_walker.logger import init_logging, logger
from site_walker.report.json_report import render_json
from site_walker.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteWalker, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
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
    help='Log file path (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteWalker command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option(
    '--concurrency', '-k', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Maximum number of fetches in flight (override config)'
)
@click.option(
    '--max-urls', 'max_urls',
    type=click.IntRange(min=1),
    default=None,
    help='Stop scheduling after this many URLs'
)
@click.option(
    '--max-depth', 'max_depth',
    type=click.IntRange(min=0),
    default=None,
    help='Do not follow links deeper than this'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to this file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with a custom report.html.j2'
)
@click.pass_context
def crawl(ctx, urls, concurrency, max_urls, max_depth, json_output, html_output, template_dir):
    """Crawl breadth-first from the seed URLs."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            concurrency=concurrency, max_urls=max_urls, max_depth=max_depth
        )
    except ValueError as e:
        print_error(f'Invalid option: {e}')

    report = asyncio.run(start_crawl(cfg, urls))

    if report.failures:
        logger.warning('%d URL(s) could not be fetched', len(report.failures))

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            logger.info('JSON report: %s', saved_json)
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output, template_dir)
            logger.info('HTML report: %s', saved_html)
        except (OSError, TemplateError) as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('outline', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def show_outline(ctx, url):
    """Print the element outline of one page."""
    cfg = ctx.obj['config']
    try:
        lines = asyncio.run(fetch_outline(cfg, url))
    except FetchError as e:
        print_error(str(e))
    for line in lines:
        click.echo(line)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
