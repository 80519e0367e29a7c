# PR Validation Run

import asyncio
from typing import Dict, Any, Optional

from pr_validator.config.settings import Settings, get_settings
from pr_validator.models.pull_request import FileChanges, PRMetadata
from pr_validator.models.report import DangerReport
from pr_validator.tools.report_tools import (
    render_markdown_comment,
    write_results_json,
    read_results_json
)
from pr_validator.utils.git_helper import get_git_helper
from pr_validator.utils.github import GitHubClient, EventPayloadError, load_event_payload
from pr_validator.utils.logger import setup_logger, log_validation_result, LogContext
from pr_validator.validators.pr_validator import PRValidator

logger = setup_logger("runner")


class PRValidationRun:
    """
    One validation of one pull request, as run by CI
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the run"""
        self.settings = settings or get_settings()
        self.logger = logger
        self.validator = PRValidator(self.settings)

    def _github_client(self) -> Optional[GitHubClient]:
        if not self.settings.GITHUB_REPOSITORY:
            return None
        return GitHubClient(
            repository=self.settings.GITHUB_REPOSITORY,
            token=self.settings.GITHUB_TOKEN,
            api_url=self.settings.GITHUB_API_URL
        )

    def _file_loader(self, pull_request: Dict[str, Any]):
        """Build the lazy loader for the PR's file lists"""
        number = pull_request.get("number")
        base_ref = (pull_request.get("base") or {}).get("ref") or "main"
        client = self._github_client()

        def load() -> FileChanges:
            if client is not None and number is not None:
                files = asyncio.run(client.get_pull_request_files(number))
                if files:
                    return FileChanges.from_github_files(files)
                self.logger.warning(f"No files from GitHub for PR #{number}, falling back to git")
            git = get_git_helper(timeout=self.settings.COMMAND_TIMEOUT)
            return git.get_changed_files(f"origin/{base_ref}")

        return load

    def load_pr_metadata(self, event_path: Optional[str] = None) -> PRMetadata:
        """
        Build PR metadata from the CI event payload

        Args:
            event_path: Event JSON path, defaults to ``GITHUB_EVENT_PATH``

        Returns:
            PR metadata with lazily loaded file lists

        Raises:
            EventPayloadError: If no event payload is available
        """
        path = event_path or self.settings.GITHUB_EVENT_PATH
        if not path:
            raise EventPayloadError("No event payload given and GITHUB_EVENT_PATH is not set")

        pull_request = load_event_payload(path)
        return PRMetadata.from_github_payload(pull_request, file_loader=self._file_loader(pull_request))

    def post_comment(self, pr: PRMetadata, report: DangerReport) -> bool:
        """Post the rendered report on the pull request"""
        client = self._github_client()
        if client is None or pr.number is None:
            self.logger.warning("Cannot post results: repository or PR number unknown")
            return False
        return asyncio.run(client.post_pr_comment(pr.number, render_markdown_comment(report)))

    def run(
            self,
            pr: PRMetadata,
            output_path: Optional[str] = None,
            previous_results_path: Optional[str] = None,
            post_comment: Optional[bool] = None
    ) -> DangerReport:
        """
        Validate a pull request and publish the results

        Args:
            pr: Pull request metadata
            output_path: Where to write Danger results JSON
            previous_results_path: Results JSON whose failures carry over
            post_comment: Post the report on the PR; defaults to ``POST_RESULTS_TO_PR``

        Returns:
            Validation report

        Raises:
            ResultsFileError: If the previous results cannot be read
        """
        report = None
        if previous_results_path:
            # Only failures carry over; the earlier run's other annotations are its own
            previous = read_results_json(previous_results_path)
            report = DangerReport(existing_failures=previous.fails)

        with LogContext(self.logger, pr_id=pr.number):
            report = self.validator.validate(pr, report)
            results = report.to_dict()
            log_validation_result(self.logger, str(pr.number), results)

            if output_path:
                write_results_json(report, output_path)

            if post_comment is None:
                post_comment = self.settings.POST_RESULTS_TO_PR
            if post_comment:
                self.post_comment(pr, report)

        return report
