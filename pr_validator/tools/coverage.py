# Xcode Coverage Tools

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence

from pr_validator.models.report import DangerReport
from pr_validator.utils.logger import setup_logger

logger = setup_logger("tools.coverage")

DEFAULT_TIMEOUT = 120  # seconds


class CoverageError(Exception):
    """Raised when the coverage report cannot be obtained or decoded"""


@dataclass
class FileCoverage:
    """Coverage of one source file"""
    name: str
    path: str
    line_coverage: float

    @property
    def percentage(self) -> float:
        return round(self.line_coverage * 100, 2)


@dataclass
class TargetCoverage:
    """Coverage of one build target, restricted to the files of interest"""
    name: str
    line_coverage: float
    files: List[FileCoverage] = field(default_factory=list)

    @property
    def percentage(self) -> float:
        return round(self.line_coverage * 100, 2)


def load_xccov_report(
        xcresult_path: str,
        json_path: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT
) -> Dict[str, Any]:
    """
    Obtain the xccov JSON report for a result bundle

    Args:
        xcresult_path: Path to the .xcresult bundle
        json_path: Pre-exported report; used instead of running xccov when set
        timeout: Seconds to wait for xccov

    Returns:
        Parsed report

    Raises:
        CoverageError: If the report cannot be produced or parsed
    """
    if json_path:
        try:
            return json.loads(Path(json_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CoverageError(f"Could not read {json_path}: {e}") from e

    cmd = ["xcrun", "xccov", "view", "--report", "--json", xcresult_path]
    logger.debug(f"Running coverage command: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise CoverageError(str(e)) from e

    if result.returncode != 0:
        raise CoverageError(result.stderr.strip() or f"xccov exited with {result.returncode}")

    try:
        return json.loads(result.stdout)
    except ValueError as e:
        raise CoverageError(f"Invalid xccov output: {e}") from e


def is_touched(path: str, edited_files: Sequence[str]) -> bool:
    """Check whether an absolute report path is one of the repository-relative edited files"""
    return any(path == edited or path.endswith("/" + edited.lstrip("/")) for edited in edited_files)


def filter_targets(
        data: Dict[str, Any],
        edited_files: Sequence[str],
        excluded_targets: Sequence[str]
) -> List[TargetCoverage]:
    """
    Keep the targets and files touched by the pull request

    Args:
        data: xccov JSON report
        edited_files: Repository-relative paths changed by the PR
        excluded_targets: Target names to ignore

    Returns:
        Targets with at least one touched file
    """
    targets = []
    for target in data.get("targets", []):
        name = target.get("name", "")
        if name in excluded_targets:
            continue

        # xccov reports absolute paths
        files = [
            FileCoverage(
                name=entry.get("name", ""),
                path=entry.get("path", ""),
                line_coverage=float(entry.get("lineCoverage", 0.0))
            )
            for entry in target.get("files", [])
            if is_touched(entry.get("path", ""), edited_files)
        ]

        if files:
            targets.append(TargetCoverage(
                name=name,
                line_coverage=float(target.get("lineCoverage", 0.0)),
                files=files
            ))
    return targets


def render_target_markdown(target: TargetCoverage, minimum_coverage: float) -> str:
    """Render the coverage table of one target"""
    lines = [
        f"## Current coverage for {target.name} is `{target.percentage:.2f}%`",
        "Files changed | - | -",
        "--- | --- | ---"
    ]
    for file in target.files:
        flag = ":warning:" if file.percentage < minimum_coverage else ":white_check_mark:"
        lines.append(f"{file.name} | {file.percentage:.2f}% | {flag}")
    return "\n".join(lines)


class XcodeBuildCoverage:
    """Reports xccov coverage of the files touched by a pull request"""

    def __init__(self, json_path: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize reporter

        Args:
            json_path: Optional pre-exported xccov JSON report
            timeout: Seconds to wait for xccov
        """
        self.json_path = json_path
        self.timeout = timeout

    def report(
            self,
            report: DangerReport,
            xcresult_path: str,
            edited_files: Sequence[str],
            minimum_coverage: float,
            excluded_targets: Sequence[str]
    ) -> None:
        """
        Add coverage annotations to a report

        Args:
            report: Report to add annotations to
            xcresult_path: Path to the .xcresult bundle
            edited_files: Files modified or created by the PR
            minimum_coverage: Minimum coverage percentage
            excluded_targets: Target names to ignore
        """
        try:
            data = load_xccov_report(xcresult_path, self.json_path, self.timeout)
        except CoverageError as e:
            logger.error(f"Coverage report unavailable for {xcresult_path}: {e}")
            report.fail(f"Failed to get the coverage - Error: {e}")
            return

        targets = filter_targets(data, edited_files, excluded_targets)
        if not targets:
            logger.info("No covered files touched by this PR")
            return

        for target in targets:
            report.markdown(render_target_markdown(target, minimum_coverage))

            if target.percentage < minimum_coverage:
                report.warn(
                    f"Coverage for {target.name} is {target.percentage:.2f}%, "
                    f"below the minimum of {minimum_coverage:.2f}%"
                )

        logger.info(f"Reported coverage for {len(targets)} target(s)")
