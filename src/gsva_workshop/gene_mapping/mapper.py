"""Gene identifier mapping via mygene batch queries.

Translates the gene identifiers of a GeneSetCollection from one namespace
(HGNC symbol, Entrez gene ID, Ensembl gene ID) to another. Handles notfound
results, repeated hits for one query and nested mygene fields.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import mygene

from gsva_workshop.gmt.models import GeneSet, GeneSetCollection

logger = logging.getLogger(__name__)


class GeneIdType(str, Enum):
    """Gene identifier namespaces understood by the mapper.

    Values are the mygene scope/field names for each namespace.
    """

    SYMBOL = "symbol"
    ENTREZ = "entrezgene"
    ENSEMBL = "ensembl.gene"


@dataclass
class MappingReport:
    """Summary report for one collection mapping.

    Attributes:
        source_type: Namespace of the input identifiers
        target_type: Namespace of the output identifiers
        total_ids: Number of distinct identifiers queried
        mapped_ids: Number of identifiers with a target identifier
        unmapped_ids: Identifiers with no target identifier
        dropped_gene_sets: Gene sets left without any mapped gene
        success_rate: Fraction of identifiers mapped (0-1)
    """
    source_type: str
    target_type: str
    total_ids: int
    mapped_ids: int
    unmapped_ids: list[str] = field(default_factory=list)
    dropped_gene_sets: list[str] = field(default_factory=list)
    success_rate: float = 0.0

    def __post_init__(self):
        """Calculate success rate after initialization."""
        if self.total_ids > 0:
            self.success_rate = self.mapped_ids / self.total_ids


def _extract_field(hit: dict[str, Any], dotted_field: str) -> str | None:
    """Pull a possibly nested field out of a mygene hit.

    mygene returns nested dicts for dotted fields ("ensembl.gene") and a list
    of dicts when a gene has several entries; the first value wins.
    """
    value: Any = hit
    for part in dotted_field.split("."):
        if isinstance(value, list):
            value = value[0] if value else None
        if not isinstance(value, dict):
            return None
        value = value.get(part)

    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    return str(value)


class GeneIdMapper:
    """Batch gene identifier mapper using the mygene API."""

    def __init__(self, batch_size: int = 1000, species: str = "human"):
        """Initialize gene identifier mapper.

        Args:
            batch_size: Number of identifiers to query per batch (default: 1000)
            species: Species passed to mygene (default: human)
        """
        self.batch_size = batch_size
        self.species = species
        self.mg = mygene.MyGeneInfo()
        logger.info(
            f"Initialized GeneIdMapper with batch_size={batch_size}, species={species}"
        )

    def map_ids(
        self,
        gene_ids: list[str],
        source_type: GeneIdType | str,
        target_type: GeneIdType | str,
    ) -> dict[str, str]:
        """Map identifiers between namespaces.

        Args:
            gene_ids: Identifiers in the source namespace
            source_type: Namespace of gene_ids
            target_type: Namespace to translate into

        Returns:
            Dict from source identifier to target identifier; identifiers
            mygene could not map are absent.
        """
        source_type = GeneIdType(source_type)
        target_type = GeneIdType(target_type)
        translation: dict[str, str] = {}

        total = len(gene_ids)
        total_batches = (total + self.batch_size - 1) // self.batch_size

        for i in range(0, total, self.batch_size):
            batch = gene_ids[i:i + self.batch_size]
            batch_num = i // self.batch_size + 1

            logger.info(
                f"Processing batch {batch_num}/{total_batches} "
                f"({len(batch)} identifiers)"
            )

            batch_results = self.mg.querymany(
                batch,
                scopes=source_type.value,
                fields=target_type.value,
                species=self.species,
                returnall=True,
            )

            for hit in batch_results.get('out', []):
                query = str(hit.get('query', ''))
                if hit.get('notfound', False) or query in translation:
                    continue

                target_id = _extract_field(hit, target_type.value)
                if target_id is not None:
                    translation[query] = target_id

        return translation

    def map_collection(
        self,
        collection: GeneSetCollection,
        target_type: GeneIdType | str,
    ) -> tuple[GeneSetCollection, MappingReport]:
        """Translate every gene identifier in a collection.

        Unmapped identifiers are dropped from their gene sets, identifiers that
        collapse onto the same target are kept once, and gene sets left empty
        are dropped. Gene set order and descriptions are preserved.

        Args:
            collection: Collection tagged with its gene_id_type
            target_type: Namespace for the returned collection

        Returns:
            Tuple of (mapped_collection, mapping_report)

        Raises:
            ValueError: If the collection has no gene_id_type or an unknown one
        """
        if collection.gene_id_type is None:
            raise ValueError(
                "Collection has no gene_id_type; import it with gene_id_type set"
            )
        source_type = GeneIdType(collection.gene_id_type)
        target_type = GeneIdType(target_type)

        gene_ids = [g for g in collection.all_genes() if g]
        logger.info(
            f"Mapping {len(gene_ids)} identifiers from {source_type.value} "
            f"to {target_type.value}"
        )

        if source_type is target_type:
            translation = {g: g for g in gene_ids}
        else:
            translation = self.map_ids(gene_ids, source_type, target_type)

        mapped_sets: list[GeneSet] = []
        dropped: list[str] = []
        for gs in collection:
            genes = list(dict.fromkeys(
                translation[g] for g in gs.genes if g in translation
            ))
            if not genes:
                dropped.append(gs.name)
                continue
            mapped_sets.append(
                GeneSet(name=gs.name, description=gs.description, genes=genes)
            )

        report = MappingReport(
            source_type=source_type.value,
            target_type=target_type.value,
            total_ids=len(gene_ids),
            mapped_ids=len(translation),
            unmapped_ids=[g for g in gene_ids if g not in translation],
            dropped_gene_sets=dropped,
        )

        logger.info(
            f"Mapping complete: {report.mapped_ids}/{report.total_ids} identifiers "
            f"({report.success_rate:.1%}), {len(dropped)} gene sets dropped"
        )

        mapped = GeneSetCollection(gene_sets=mapped_sets, gene_id_type=target_type.value)
        return mapped, report
