"""Main CLI entry point for gsva-workshop.

Provides command group with global options and subcommands for GMT import.
"""

import logging
from pathlib import Path

import click

from gsva_workshop import __version__
from gsva_workshop.config import load_config
from gsva_workshop.cli.import_cmd import import_cmd
from gsva_workshop.cli.map_cmd import map_cmd


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help='Path to configuration YAML file (defaults apply when omitted)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """gsva-workshop: GMT gene set import for gene set variation analysis.

    Imports local, remote or gzip-compressed GMT files, resolves duplicate
    gene set names, maps gene identifiers and exports the results.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display version and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"gsva-workshop v{__version__}")
    click.echo(f"Config: {config_path or '(defaults)'}")
    click.echo()

    try:
        config = load_config(config_path)
    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)

    click.echo(f"Config Hash: {config.config_hash()[:16]}...")
    click.echo()

    click.echo(click.style("Importer:", bold=True))
    click.echo(f"  Dedup Policy: {config.importer.dedup_policy.value}")
    click.echo(f"  Output Form:  {config.importer.output_form.value}")
    click.echo(f"  Gene ID Type: {config.importer.gene_id_type or '(none)'}")
    click.echo(f"  Timeout:      {config.importer.timeout_seconds}s")
    click.echo()

    click.echo(click.style("Annotation:", bold=True))
    click.echo(f"  Species:          {config.annotation.species}")
    click.echo(f"  Batch Size:       {config.annotation.batch_size}")
    click.echo(f"  Min Success Rate: {config.annotation.min_success_rate:.0%}")
    click.echo()

    click.echo(f"Output Directory: {config.output_dir}")


cli.add_command(import_cmd)
cli.add_command(map_cmd)


if __name__ == '__main__':
    cli()
