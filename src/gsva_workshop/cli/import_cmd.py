"""Import command: parse a GMT file and optionally export it."""

import logging
import sys
from pathlib import Path

import click

from gsva_workshop.config import load_config
from gsva_workshop.gmt import DedupPolicy, GmtImportError, OutputForm, import_gmt
from gsva_workshop.output import write_gene_set_table, write_gmt

logger = logging.getLogger(__name__)


@click.command('import')
@click.argument('source')
@click.option(
    '--dedup',
    type=click.Choice([p.value for p in DedupPolicy], case_sensitive=False),
    default=None,
    help='Duplicate gene set name policy (overrides config)'
)
@click.option(
    '--gene-id-type',
    default=None,
    help='Gene identifier namespace of the file, e.g. symbol (overrides config)'
)
@click.option(
    '--gmt-out',
    type=click.Path(path_type=Path),
    default=None,
    help='Write the deduplicated gene sets back to this GMT file'
)
@click.option(
    '--table-dir',
    type=click.Path(path_type=Path),
    default=None,
    help='Write a long-format TSV/Parquet gene set table to this directory'
)
@click.pass_context
def import_cmd(ctx, source, dedup, gene_id_type, gmt_out, table_dir):
    """Import the GMT file at SOURCE (local path or http(s) URL)."""
    config = load_config(ctx.obj['config_path'])
    settings = config.importer
    policy = DedupPolicy(dedup) if dedup else settings.dedup_policy

    click.echo(f"Importing {source} (dedup policy: {policy.value})...")

    try:
        collection = import_gmt(
            source,
            gene_id_type=gene_id_type or settings.gene_id_type,
            dedup_policy=policy,
            output_form=OutputForm.COLLECTION,
            timeout=settings.timeout_seconds,
            encoding=settings.encoding,
        )
    except GmtImportError as e:
        click.echo(click.style(f"Import failed: {e}", fg='red'), err=True)
        logger.debug("GMT import failed", exc_info=True)
        sys.exit(1)

    sizes = [gs.size for gs in collection]
    click.echo(click.style(
        f"  Imported {len(collection)} gene sets "
        f"({len(collection.all_genes())} distinct genes)",
        fg='green'
    ))
    if sizes:
        click.echo(f"  Gene set sizes: {min(sizes)}-{max(sizes)}")
    click.echo(f"  Gene ID Type: {collection.gene_id_type or '(none)'}")

    if gmt_out is not None:
        path = write_gmt(collection, gmt_out)
        click.echo(f"  GMT written: {path}")

    if table_dir is not None:
        paths = write_gene_set_table(collection, table_dir)
        click.echo(f"  Table written: {paths['tsv']}, {paths['parquet']}")
