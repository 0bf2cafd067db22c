"""Exceptions raised while importing GMT files."""


class GmtImportError(Exception):
    """Base class for fatal GMT import failures."""


class SourceUnavailableError(GmtImportError):
    """The GMT source could not be opened, fetched, decompressed or decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read GMT source {source}: {reason}")


class MalformedLineError(GmtImportError):
    """A GMT line has fewer than the three required fields."""

    def __init__(self, line_number: int, line: str, field_count: int):
        self.line_number = line_number
        self.line = line
        self.field_count = field_count
        preview = line if len(line) <= 80 else line[:77] + "..."
        super().__init__(
            f"Line {line_number}: expected at least 3 tab-separated fields "
            f"(name, description, gene), got {field_count}: {preview!r}"
        )


class DuplicateNameError(GmtImportError):
    """Gene set names repeat under DedupPolicy.ERROR.

    Attributes:
        duplicates: Every repeated name mapped to its occurrence count
    """

    def __init__(self, duplicates: dict[str, int]):
        self.duplicates = dict(duplicates)
        listing = ", ".join(
            f"{name} ({count}x)" for name, count in self.duplicates.items()
        )
        super().__init__(
            f"{len(self.duplicates)} duplicated gene set name(s): {listing}"
        )
