"""Output writers for gene set collections."""

from gsva_workshop.output.writers import format_gmt_lines, write_gmt, write_gene_set_table

__all__ = [
    "format_gmt_lines",
    "write_gmt",
    "write_gene_set_table",
]
