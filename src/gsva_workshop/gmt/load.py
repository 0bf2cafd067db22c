"""Import GMT files into gene set collections or plain mappings."""

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from gsva_workshop.gmt.fetch import (
    DEFAULT_ENCODING,
    DEFAULT_TIMEOUT,
    iter_source_lines,
    open_gmt_source,
)
from gsva_workshop.gmt.models import DedupPolicy, GeneSetCollection, OutputForm
from gsva_workshop.gmt.transform import parse_gmt_lines, resolve_duplicates

if TYPE_CHECKING:
    from gsva_workshop.config.schema import WorkshopConfig

logger = structlog.get_logger()


def import_gmt(
    source: str | Path,
    gene_id_type: str | None = None,
    dedup_policy: DedupPolicy | str = DedupPolicy.FIRST,
    output_form: OutputForm | str = OutputForm.COLLECTION,
    timeout: float = DEFAULT_TIMEOUT,
    encoding: str = DEFAULT_ENCODING,
) -> GeneSetCollection | dict[str, list[str]]:
    """Import a GMT file.

    The source is read once to completion and closed before duplicates are
    resolved, so no fatal error ever returns a partial result.

    Args:
        source: Local path or http(s) URL; gzip content is detected automatically
        gene_id_type: Optional identifier namespace tag (e.g. "symbol",
            "entrezgene") attached to the returned collection
        dedup_policy: Handling of repeated gene set names (default: first)
        output_form: "collection" for a GeneSetCollection, "mapping" for a
            plain name -> genes dict without descriptions or tag
        timeout: Timeout in seconds for remote sources
        encoding: Text encoding of the file (default utf-8-sig, which also
            reads plain UTF-8)

    Returns:
        GeneSetCollection or dict, depending on output_form

    Raises:
        SourceUnavailableError: If the source cannot be opened, fetched or decoded
        MalformedLineError: If a line has fewer than 3 fields
        DuplicateNameError: Under dedup_policy="error" when names repeat
        ValueError: For unknown dedup_policy or output_form values

    Notes:
        With dedup_policy="none" and output_form="mapping", later sets
        overwrite earlier ones sharing a name.
    """
    dedup_policy = DedupPolicy(dedup_policy)
    output_form = OutputForm(output_form)

    logger.info(
        "gmt_import_start",
        source=str(source),
        dedup_policy=dedup_policy.value,
        output_form=output_form.value,
    )

    with open_gmt_source(source, timeout=timeout, encoding=encoding) as stream:
        raw_gene_sets = parse_gmt_lines(iter_source_lines(stream, source))

    gene_sets = resolve_duplicates(raw_gene_sets, dedup_policy)
    collection = GeneSetCollection(gene_sets=gene_sets, gene_id_type=gene_id_type)

    logger.info(
        "gmt_import_complete",
        source=str(source),
        parsed=len(raw_gene_sets),
        gene_set_count=len(collection),
    )

    if output_form is OutputForm.MAPPING:
        return collection.to_dict()
    return collection


def import_gmt_with_config(
    source: str | Path,
    config: "WorkshopConfig",
) -> GeneSetCollection | dict[str, list[str]]:
    """Import a GMT file using the importer defaults of a loaded config."""
    settings = config.importer
    return import_gmt(
        source,
        gene_id_type=settings.gene_id_type,
        dedup_policy=settings.dedup_policy,
        output_form=settings.output_form,
        timeout=settings.timeout_seconds,
        encoding=settings.encoding,
    )
