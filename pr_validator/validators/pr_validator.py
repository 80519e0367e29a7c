# Pull Request Validator

import re
from pathlib import Path
from typing import List, Dict, Any, Optional

from pr_validator.config.settings import Settings
from pr_validator.models.annotation import Annotation
from pr_validator.models.pull_request import PRMetadata
from pr_validator.models.report import DangerReport
from pr_validator.validators.base_validator import BaseValidator
from pr_validator.validators.description_validator import DescriptionValidator
from pr_validator.validators.unit_test_validator import UnitTestValidator

BIG_PR_WARNING = "Big PR, try to keep changes smaller if you can, or split them into several PRs"
TITLE_WARNING = "Please use a title in the format: [Tag] Description"
NO_ASSIGNEE_WARNING = (
    "Please assign someone to merge this PR, and optionally include people who should review."
)
TOO_MANY_FILES_WARNING = (
    "This PR changes a lot of files, consider splitting it into smaller features"
)
SUMMARY_TEMPLATE = "The PR added {additions} and removed {deletions} lines. {changed_files} file(s) changed."


class PRValidator(BaseValidator):
    """
    Runs the pull request rules.

    Every checkpoint is independent; annotations are collected in checkpoint
    order, then the fail sentinel is touched when any failure exists and a
    summary message closes the report.
    """

    name = "pr"

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.title_regex = re.compile(self.settings.TITLE_PATTERN)
        self.description_validator = DescriptionValidator(self.settings)
        self.unit_test_validator = UnitTestValidator(self.settings)

    def get_checkpoints(self) -> List[Dict[str, Any]]:
        return [
            {"id": "size", "name": "PR size"},
            {"id": "description", "name": "PR description"},
            {"id": "unit_tests", "name": "Unit tests and coverage"},
            {"id": "title", "name": "PR title format"},
            {"id": "assignee", "name": "PR assignee"},
            {"id": "changed_files", "name": "Changed files count"}
        ]

    def check_size(self, pr: PRMetadata) -> List[Annotation]:
        if pr.lines_changed > self.settings.MAX_PR_LINES:
            return [Annotation.warning(BIG_PR_WARNING)]
        return []

    def check_description(self, pr: PRMetadata) -> List[Annotation]:
        return self.description_validator.run_checks(pr)

    def check_unit_tests(self, pr: PRMetadata) -> List[Annotation]:
        return self.unit_test_validator.run_checks(pr)

    def check_title(self, pr: PRMetadata) -> List[Annotation]:
        if not self.title_regex.search(pr.title):
            return [Annotation.warning(TITLE_WARNING)]
        return []

    def check_assignee(self, pr: PRMetadata) -> List[Annotation]:
        if not pr.has_assignee:
            return [Annotation.warning(NO_ASSIGNEE_WARNING)]
        return []

    def check_changed_files(self, pr: PRMetadata) -> List[Annotation]:
        if pr.changed_files > self.settings.MAX_CHANGED_FILES:
            return [Annotation.warning(TOO_MANY_FILES_WARNING)]
        return []

    def mark_failures(self, report: DangerReport) -> bool:
        """
        Touch the fail sentinel when the report holds a failure

        Args:
            report: Report after all checks ran

        Returns:
            True if the sentinel was touched
        """
        if not report.has_failures:
            return False

        sentinel = Path(self.settings.FAIL_SENTINEL_PATH)
        sentinel.touch(exist_ok=True)
        self.logger.info(f"Marked {len(report.fails)} failure(s) in {sentinel}")
        return True

    def validate(self, pr: PRMetadata, report: Optional[DangerReport] = None) -> DangerReport:
        """
        Validate a pull request

        Args:
            pr: Pull request metadata
            report: Report to add to, e.g. one carrying earlier failures

        Returns:
            The report with this run's annotations appended
        """
        if report is None:
            report = DangerReport()

        self.logger.info(f"Validating PR #{pr.number}: {pr.title!r}")

        report.extend(self.run_checks(pr))
        self.mark_failures(report)
        report.message(SUMMARY_TEMPLATE.format(
            additions=pr.additions,
            deletions=pr.deletions,
            changed_files=pr.changed_files
        ))

        return report
