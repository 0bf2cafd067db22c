"""
GSVA workshop helpers
=====================

Import GMT gene set files into collections for gene set variation analysis.
"""

__version__ = "0.1.0"

from gsva_workshop.gmt import (
    DedupPolicy,
    DuplicateNameError,
    GeneSet,
    GeneSetCollection,
    GmtImportError,
    MalformedLineError,
    OutputForm,
    SourceUnavailableError,
    import_gmt,
    import_gmt_with_config,
)
from gsva_workshop.output import write_gmt, write_gene_set_table

__all__ = [
    "DedupPolicy",
    "DuplicateNameError",
    "GeneSet",
    "GeneSetCollection",
    "GmtImportError",
    "MalformedLineError",
    "OutputForm",
    "SourceUnavailableError",
    "import_gmt",
    "import_gmt_with_config",
    "write_gmt",
    "write_gene_set_table",
]
