"""GMT gene set import."""

from gsva_workshop.gmt.errors import (
    DuplicateNameError,
    GmtImportError,
    MalformedLineError,
    SourceUnavailableError,
)
from gsva_workshop.gmt.fetch import open_gmt_source, fetch_remote_bytes, is_remote
from gsva_workshop.gmt.models import (
    DedupPolicy,
    GeneSet,
    GeneSetCollection,
    OutputForm,
)
from gsva_workshop.gmt.transform import (
    find_duplicate_names,
    parse_gmt_line,
    parse_gmt_lines,
    resolve_duplicates,
)
from gsva_workshop.gmt.load import import_gmt, import_gmt_with_config

__all__ = [
    "DuplicateNameError",
    "GmtImportError",
    "MalformedLineError",
    "SourceUnavailableError",
    "open_gmt_source",
    "fetch_remote_bytes",
    "is_remote",
    "DedupPolicy",
    "GeneSet",
    "GeneSetCollection",
    "OutputForm",
    "find_duplicate_names",
    "parse_gmt_line",
    "parse_gmt_lines",
    "resolve_duplicates",
    "import_gmt",
    "import_gmt_with_config",
]
