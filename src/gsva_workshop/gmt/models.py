"""Data models for GMT gene set imports."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import polars as pl
from pydantic import BaseModel, ConfigDict, Field


class DedupPolicy(str, Enum):
    """Resolution policy for gene set names repeated within one GMT source.

    FIRST and LAST keep one occurrence and log a warning, ERROR rejects the
    whole import, NONE keeps every occurrence.
    """

    FIRST = "first"
    LAST = "last"
    ERROR = "error"
    NONE = "none"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class OutputForm(str, Enum):
    """Shape of the value returned by an import."""

    COLLECTION = "collection"
    MAPPING = "mapping"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class GeneSet(BaseModel):
    """One gene set parsed from a single GMT line.

    Attributes:
        name: Gene set identifier (field 0)
        description: Free text, often a URL (field 1, may be empty)
        genes: Gene identifiers in file order (fields 2+). Repeats within a
            line and empty strings from trailing tabs are kept verbatim.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    genes: list[str] = Field(..., min_length=1)

    @property
    def size(self) -> int:
        return len(self.genes)


@dataclass
class GeneSetCollection:
    """Ordered gene sets sharing one optional gene identifier type tag.

    The tag is passed through untouched; only the identifier mapping layer
    interprets it. Names are unique unless the collection was built with
    DedupPolicy.NONE.
    """

    gene_sets: list[GeneSet] = field(default_factory=list)
    gene_id_type: str | None = None

    def __len__(self) -> int:
        return len(self.gene_sets)

    def __iter__(self) -> Iterator[GeneSet]:
        return iter(self.gene_sets)

    def __contains__(self, name: object) -> bool:
        return any(gs.name == name for gs in self.gene_sets)

    def __getitem__(self, name: str) -> GeneSet:
        """Return the first gene set called `name`."""
        for gs in self.gene_sets:
            if gs.name == name:
                return gs
        raise KeyError(name)

    @property
    def names(self) -> list[str]:
        return [gs.name for gs in self.gene_sets]

    def all_genes(self) -> list[str]:
        """Distinct gene identifiers across all sets, in first-seen order."""
        return list(dict.fromkeys(g for gs in self.gene_sets for g in gs.genes))

    def to_dict(self) -> dict[str, list[str]]:
        """Plain name -> genes mapping.

        Later sets overwrite earlier ones sharing a name, so a collection
        holding repeated names loses data here.
        """
        mapping: dict[str, list[str]] = {}
        for gs in self.gene_sets:
            mapping[gs.name] = list(gs.genes)
        return mapping

    def to_dataframe(self) -> pl.DataFrame:
        """Long-format table with one row per (gene set, gene) pair."""
        rows = [
            {"gene_set": gs.name, "description": gs.description, "gene": gene}
            for gs in self.gene_sets
            for gene in gs.genes
        ]
        return pl.DataFrame(
            rows,
            schema={"gene_set": pl.Utf8, "description": pl.Utf8, "gene": pl.Utf8},
        )
