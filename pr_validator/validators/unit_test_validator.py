# Unit Test Validator

from pathlib import Path
from typing import List, Dict, Any

from pr_validator.models.annotation import Annotation
from pr_validator.models.pull_request import PRMetadata
from pr_validator.models.report import DangerReport
from pr_validator.tools.coverage import XcodeBuildCoverage
from pr_validator.tools.xcode_summary import XcodeSummary, ResultCategory
from pr_validator.validators.base_validator import BaseValidator


class UnitTestValidator(BaseValidator):
    """Reports the build/test summary and the coverage of touched files"""

    name = "unit_tests"

    def get_checkpoints(self) -> List[Dict[str, Any]]:
        return [
            {"id": "build_summary", "name": "Build and test summary"},
            {"id": "coverage", "name": "Code coverage"}
        ]

    def check_build_summary(self, pr: PRMetadata) -> List[Annotation]:
        """Report every non-warning entry of the summary, when the summary exists"""
        summary_path = Path(self.settings.XCODE_SUMMARY_PATH)
        if not summary_path.is_file():
            self.logger.debug(f"No build summary at {summary_path}, skipping")
            return []

        report = DangerReport()
        summary = XcodeSummary(
            str(summary_path),
            result_filter=lambda result: result.category != ResultCategory.WARNING
        )

        try:
            summary.report(report)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not read build summary {summary_path}, skipping: {e}")
            return []

        return report.annotations

    def check_coverage(self, pr: PRMetadata) -> List[Annotation]:
        """Let the coverage reporter decide on the coverage of touched files"""
        report = DangerReport()
        coverage = XcodeBuildCoverage(
            json_path=self.settings.COVERAGE_JSON_PATH,
            timeout=self.settings.COMMAND_TIMEOUT
        )
        coverage.report(
            report,
            xcresult_path=self.settings.XCRESULT_PATH,
            edited_files=pr.edited_files,
            minimum_coverage=self.settings.MINIMUM_COVERAGE,
            excluded_targets=self.settings.COVERAGE_EXCLUDED_TARGETS
        )
        return report.annotations
