"""GMT and tabular writers for gene set collections."""

import gzip
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Sequence

import polars as pl
import structlog
import yaml

from gsva_workshop.gmt.models import GeneSetCollection

logger = structlog.get_logger()


def format_gmt_lines(
    gene_sets: GeneSetCollection | Mapping[str, Sequence[str]],
) -> list[str]:
    """Render gene sets as GMT lines (without terminators).

    Plain mappings carry no descriptions, so their description field is empty.
    """
    if isinstance(gene_sets, GeneSetCollection):
        records = [(gs.name, gs.description, gs.genes) for gs in gene_sets]
    else:
        records = [(name, "", genes) for name, genes in gene_sets.items()]

    return ["\t".join([name, description, *genes]) for name, description, genes in records]


def write_gmt(
    gene_sets: GeneSetCollection | Mapping[str, Sequence[str]],
    output_path: Path,
) -> Path:
    """
    Write gene sets to a GMT file.

    The output re-imports to an equivalent collection. Paths ending in
    ".gz" are gzip-compressed.

    Args:
        gene_sets: GeneSetCollection or name -> genes mapping
        output_path: Destination file (parent directories are created)

    Returns:
        Path to the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    lines = format_gmt_lines(gene_sets)
    content = "".join(f"{line}\n" for line in lines)

    if output_path.suffix == ".gz":
        with gzip.open(output_path, "wt", encoding="utf-8") as f:
            f.write(content)
    else:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

    logger.info("gmt_write_complete", path=str(output_path), gene_set_count=len(lines))
    return output_path


def write_gene_set_table(
    collection: GeneSetCollection,
    output_dir: Path,
    filename_base: str = "gene_sets",
) -> dict:
    """
    Write a collection as a long-format table in TSV and Parquet formats.

    Produces identical data in both formats, one row per (gene set, gene)
    pair, plus a YAML provenance sidecar with summary statistics.

    Args:
        collection: Gene sets to export
        output_dir: Directory to write output files (created if doesn't exist)
        filename_base: Base filename without extension (default: "gene_sets")

    Returns:
        Dictionary with output file paths:
        {
            "tsv": Path to TSV file,
            "parquet": Path to Parquet file,
            "provenance": Path to YAML provenance sidecar
        }
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = collection.to_dataframe()

    tsv_path = output_dir / f"{filename_base}.tsv"
    parquet_path = output_dir / f"{filename_base}.parquet"
    provenance_path = output_dir / f"{filename_base}.provenance.yaml"

    df.write_csv(tsv_path, separator="\t", include_header=True)
    df.write_parquet(parquet_path, compression="snappy", use_pyarrow=True)

    sizes = [gs.size for gs in collection]
    provenance = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "output_files": [tsv_path.name, parquet_path.name],
        "gene_id_type": collection.gene_id_type,
        "statistics": {
            "gene_set_count": len(collection),
            "distinct_gene_count": len(collection.all_genes()),
            "row_count": df.height,
            "min_set_size": min(sizes) if sizes else 0,
            "max_set_size": max(sizes) if sizes else 0,
        },
        "column_names": df.columns,
    }

    with open(provenance_path, "w") as f:
        yaml.dump(provenance, f, default_flow_style=False, sort_keys=False)

    logger.info(
        "gene_set_table_write_complete",
        tsv=str(tsv_path),
        parquet=str(parquet_path),
        rows=df.height,
    )

    return {
        "tsv": tsv_path,
        "parquet": parquet_path,
        "provenance": provenance_path,
    }
