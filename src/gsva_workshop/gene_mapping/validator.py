"""Validation gate for gene identifier mapping quality."""

import logging
from dataclasses import dataclass, field

from gsva_workshop.gene_mapping.mapper import MappingReport

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        passed: Whether validation passed
        messages: List of validation messages (warnings, errors)
        success_rate: Identifier mapping success rate (0-1)
    """
    passed: bool
    messages: list[str] = field(default_factory=list)
    success_rate: float = 0.0


class MappingValidator:
    """Enforces a minimum identifier mapping success rate."""

    def __init__(
        self,
        min_success_rate: float = 0.90,
        warn_threshold: float = 0.95
    ):
        """Initialize mapping validator.

        Args:
            min_success_rate: Minimum mapping success rate to pass (default: 0.90)
            warn_threshold: Success rate below this triggers warning (default: 0.95)
        """
        self.min_success_rate = min_success_rate
        self.warn_threshold = warn_threshold

    def validate(self, report: MappingReport) -> ValidationResult:
        """Validate a mapping report.

        Args:
            report: MappingReport from GeneIdMapper.map_collection

        Returns:
            ValidationResult with pass/fail status and messages
        """
        messages: list[str] = []
        rate = report.success_rate
        summary = (
            f"Mapped {report.mapped_ids}/{report.total_ids} identifiers "
            f"({report.source_type} -> {report.target_type})"
        )

        if rate < self.min_success_rate:
            messages.append(
                f"FAILED: mapping success rate {rate:.1%} is below "
                f"minimum threshold {self.min_success_rate:.1%}"
            )
            messages.append(summary)
            messages.append(
                f"Unmapped identifiers: {len(report.unmapped_ids)} "
                f"(first 10: {report.unmapped_ids[:10]})"
            )
            passed = False
        elif rate < self.warn_threshold:
            messages.append(
                f"WARNING: mapping success rate {rate:.1%} is below "
                f"warning threshold {self.warn_threshold:.1%}"
            )
            messages.append(summary)
            passed = True
        else:
            messages.append(f"PASSED: mapping success rate {rate:.1%}")
            messages.append(summary)
            passed = True

        if report.dropped_gene_sets:
            messages.append(
                f"Dropped {len(report.dropped_gene_sets)} gene sets with no mapped genes"
            )

        logger.info(
            f"Validation result: {'PASSED' if passed else 'FAILED'} ({rate:.1%})"
        )

        return ValidationResult(passed=passed, messages=messages, success_rate=rate)
