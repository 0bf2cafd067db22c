"""Pydantic models for workshop configuration."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field

from gsva_workshop.gmt.models import DedupPolicy, OutputForm


class ImporterConfig(BaseModel):
    """Defaults applied to GMT imports."""

    dedup_policy: DedupPolicy = Field(
        default=DedupPolicy.FIRST,
        description="How repeated gene set names are resolved",
    )
    output_form: OutputForm = Field(
        default=OutputForm.COLLECTION,
        description="Return a gene set collection or a plain name -> genes mapping",
    )
    gene_id_type: str | None = Field(
        default=None,
        description="Gene identifier namespace of the imported files (e.g. symbol)",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for fetching remote GMT files",
    )
    encoding: str = Field(
        default="utf-8-sig",
        description="Text encoding of GMT files (utf-8-sig drops a byte-order mark)",
    )


class AnnotationConfig(BaseModel):
    """Configuration for gene identifier mapping via mygene."""

    species: str = Field(
        default="human",
        description="Species passed to mygene queries",
    )
    batch_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Number of identifiers per mygene batch query",
    )
    min_success_rate: float = Field(
        default=0.90,
        ge=0.0,
        le=1.0,
        description="Minimum fraction of identifiers that must map",
    )


class WorkshopConfig(BaseModel):
    """Main workshop configuration."""

    output_dir: Path = Field(
        default=Path("results"),
        description="Directory for exported gene set files",
    )
    importer: ImporterConfig = Field(
        default_factory=ImporterConfig,
        description="GMT import defaults",
    )
    annotation: AnnotationConfig = Field(
        default_factory=AnnotationConfig,
        description="Gene identifier mapping configuration",
    )

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for recording which settings produced an export.
        """
        config_dict = self.model_dump(mode="json")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
