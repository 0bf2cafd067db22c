"""Gene identifier mapping module.

Provides batch identifier translation for gene set collections via mygene,
and a validation gate on mapping quality.
"""

from gsva_workshop.gene_mapping.mapper import (
    GeneIdMapper,
    GeneIdType,
    MappingReport,
)
from gsva_workshop.gene_mapping.validator import (
    MappingValidator,
    ValidationResult,
)

__all__ = [
    "GeneIdMapper",
    "GeneIdType",
    "MappingReport",
    "MappingValidator",
    "ValidationResult",
]
