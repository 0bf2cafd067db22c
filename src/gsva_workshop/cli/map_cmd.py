"""Map command: translate gene identifiers of a GMT file via mygene."""

import logging
import sys
from pathlib import Path

import click

from gsva_workshop.config import load_config
from gsva_workshop.gene_mapping import GeneIdMapper, GeneIdType, MappingValidator
from gsva_workshop.gmt import GmtImportError, OutputForm, import_gmt
from gsva_workshop.output import write_gmt

logger = logging.getLogger(__name__)

ID_TYPES = [t.value for t in GeneIdType]


@click.command('map')
@click.argument('source')
@click.option(
    '--from', 'from_type',
    type=click.Choice(ID_TYPES),
    default=None,
    help='Identifier namespace of SOURCE (defaults to config gene_id_type)'
)
@click.option(
    '--to', 'to_type',
    type=click.Choice(ID_TYPES),
    required=True,
    help='Identifier namespace to map into'
)
@click.option(
    '--gmt-out',
    type=click.Path(path_type=Path),
    required=True,
    help='Destination GMT file for the mapped gene sets'
)
@click.pass_context
def map_cmd(ctx, source, from_type, to_type, gmt_out):
    """Map the gene identifiers of the GMT file at SOURCE to another namespace."""
    config = load_config(ctx.obj['config_path'])
    from_type = from_type or config.importer.gene_id_type
    if from_type is None:
        click.echo(click.style(
            "Source identifier type unknown: pass --from or set importer.gene_id_type",
            fg='red'
        ), err=True)
        sys.exit(1)

    try:
        collection = import_gmt(
            source,
            gene_id_type=from_type,
            dedup_policy=config.importer.dedup_policy,
            output_form=OutputForm.COLLECTION,
            timeout=config.importer.timeout_seconds,
            encoding=config.importer.encoding,
        )
    except GmtImportError as e:
        click.echo(click.style(f"Import failed: {e}", fg='red'), err=True)
        sys.exit(1)

    click.echo(f"Mapping {len(collection)} gene sets from {from_type} to {to_type}...")

    mapper = GeneIdMapper(
        batch_size=config.annotation.batch_size,
        species=config.annotation.species,
    )
    try:
        mapped, report = mapper.map_collection(collection, to_type)
    except Exception as e:
        click.echo(click.style(f"  Error mapping IDs: {e}", fg='red'), err=True)
        logger.exception("Failed to map gene identifiers")
        sys.exit(1)

    validation = MappingValidator(
        min_success_rate=config.annotation.min_success_rate
    ).validate(report)

    for msg in validation.messages:
        if 'FAILED' in msg:
            click.echo(click.style(f"  {msg}", fg='red'))
        else:
            click.echo(f"  {msg}")

    if not validation.passed:
        click.echo(click.style("Mapping validation failed", fg='red'), err=True)
        sys.exit(1)

    path = write_gmt(mapped, gmt_out)
    click.echo(click.style(f"Mapped gene sets written: {path}", fg='green'))
