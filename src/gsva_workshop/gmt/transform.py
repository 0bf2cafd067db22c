"""Parse GMT lines into gene sets and resolve repeated names."""

from collections import Counter
from typing import Iterable

import structlog

from gsva_workshop.gmt.errors import DuplicateNameError, MalformedLineError
from gsva_workshop.gmt.models import DedupPolicy, GeneSet

logger = structlog.get_logger()

FIELD_SEPARATOR = "\t"
MIN_FIELDS = 3


def parse_gmt_line(line: str, line_number: int) -> GeneSet | None:
    """Parse one physical GMT line.

    Only the line terminator is stripped; every field is kept verbatim,
    including empty genes produced by trailing tabs.

    Args:
        line: Raw line, with or without its terminator
        line_number: 1-based position of the line in the source

    Returns:
        GeneSet, or None for an empty line

    Raises:
        MalformedLineError: If the line has fewer than 3 fields
    """
    line = line.rstrip("\r\n")
    if not line:
        return None

    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < MIN_FIELDS:
        raise MalformedLineError(line_number, line, len(fields))

    return GeneSet(name=fields[0], description=fields[1], genes=fields[2:])


def parse_gmt_lines(lines: Iterable[str]) -> list[GeneSet]:
    """Parse GMT lines into the raw, ordered sequence of gene sets.

    Repeated names are all kept here; see resolve_duplicates().
    """
    gene_sets: list[GeneSet] = []
    skipped_blank = 0

    for line_number, line in enumerate(lines, start=1):
        gene_set = parse_gmt_line(line, line_number)
        if gene_set is None:
            skipped_blank += 1
            continue
        gene_sets.append(gene_set)

    logger.debug(
        "gmt_parse_complete",
        gene_set_count=len(gene_sets),
        blank_lines_skipped=skipped_blank,
    )
    return gene_sets


def find_duplicate_names(gene_sets: Iterable[GeneSet]) -> dict[str, int]:
    """Names occurring more than once, with occurrence counts, in first-seen order."""
    counts = Counter(gs.name for gs in gene_sets)
    return {name: count for name, count in counts.items() if count > 1}


def resolve_duplicates(
    gene_sets: list[GeneSet],
    policy: DedupPolicy | str = DedupPolicy.FIRST,
) -> list[GeneSet]:
    """Apply a deduplication policy to parsed gene sets.

    The whole sequence is scanned before deciding, so DedupPolicy.ERROR
    reports every repeated name at once. Survivors keep the position of
    the first occurrence of their name; under LAST the content comes from
    the last occurrence.

    Args:
        gene_sets: Raw parsed gene sets in file order
        policy: FIRST, LAST, ERROR or NONE

    Returns:
        Gene sets after resolution

    Raises:
        DuplicateNameError: Under DedupPolicy.ERROR when any name repeats
    """
    policy = DedupPolicy(policy)
    duplicates = find_duplicate_names(gene_sets)

    if not duplicates:
        return list(gene_sets)

    if policy is DedupPolicy.ERROR:
        logger.error("gmt_duplicate_names", duplicates=duplicates)
        raise DuplicateNameError(duplicates)

    if policy is DedupPolicy.NONE:
        logger.info("gmt_duplicate_names_kept", duplicate_count=len(duplicates))
        return list(gene_sets)

    survivors: dict[str, GeneSet] = {}
    for gs in gene_sets:
        if policy is DedupPolicy.FIRST:
            survivors.setdefault(gs.name, gs)
        else:
            survivors[gs.name] = gs

    for name, count in duplicates.items():
        logger.warning(
            "gmt_duplicate_gene_set",
            name=name,
            occurrences=count,
            discarded=count - 1,
            kept=policy.value,
        )

    return list(survivors.values())
