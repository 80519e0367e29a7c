# Xcode Build Summary Tools

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Dict, Any, Optional, Callable, Tuple

from pr_validator.models.report import DangerReport
from pr_validator.utils.logger import setup_logger

logger = setup_logger("tools.xcode_summary")


class ResultCategory(Enum):
    """Category of a build summary entry"""
    WARNING = "warning"
    ERROR = "error"
    MESSAGE = "message"


# Keys written by the xcpretty JSON formatter, grouped by category
WARNING_KEYS = ("warnings", "ats_warnings", "compile_warnings")
ERROR_KEYS = (
    "errors",
    "compile_errors",
    "file_missing_errors",
    "undefined_symbols_errors",
    "duplicate_symbols_errors",
    "tests_failures"
)
MESSAGE_KEYS = ("tests_summary_messages",)


@dataclass(frozen=True)
class Result:
    """Single entry of the build summary"""
    message: str
    category: ResultCategory
    file: Optional[str] = None
    line: Optional[int] = None


ResultFilter = Callable[[Result], bool]


def split_file_path(file_path: str) -> Tuple[Optional[str], Optional[int]]:
    """
    Split an xcpretty ``path:line:column`` location

    Args:
        file_path: Location string

    Returns:
        Tuple of (path, line); line is None when absent
    """
    if not file_path:
        return None, None

    parts = file_path.split(":")
    if len(parts) >= 2 and parts[1].isdigit():
        return parts[0], int(parts[1])
    return file_path, None


def _format_entry(key: str, entry: Any) -> Tuple[str, Optional[str], Optional[int]]:
    """Turn one raw entry into (message, file, line)"""
    if isinstance(entry, str):
        return entry, None, None

    file, line = split_file_path(entry.get("file_path", ""))

    if key == "undefined_symbols_errors":
        message = f"{entry.get('message', '')} `{entry.get('symbol', '')}`"
        reference = entry.get("reference")
        if reference:
            message += f" in {reference}"
        return message.strip(), file, line

    if key == "duplicate_symbols_errors":
        paths = ", ".join(entry.get("file_paths", []))
        message = entry.get("message", "")
        if paths:
            message += f" {paths}"
        return message.strip(), file, line

    message = entry.get("reason") or entry.get("message") or ""
    if entry.get("test_case"):
        message = f"**{entry['test_case']}**: {message}"
    return message, file, line


class XcodeSummary:
    """Reads the build/test summary JSON and reports it onto a DangerReport"""

    def __init__(self, file_path: str, result_filter: Optional[ResultFilter] = None):
        """
        Initialize summary

        Args:
            file_path: Path to the summary JSON
            result_filter: Keep only results for which this returns True
        """
        self.file_path = Path(file_path)
        self.result_filter = result_filter
        self._data: Optional[Dict[str, Any]] = None

    @property
    def data(self) -> Dict[str, Any]:
        """Parsed summary document, read once"""
        if self._data is None:
            with self.file_path.open(encoding="utf-8") as handle:
                data = json.load(handle)
            if not isinstance(data, dict):
                raise ValueError(f"Unexpected summary format in {self.file_path}")
            self._data = data
        return self._data

    def _collect(self, keys: Tuple[str, ...], category: ResultCategory) -> List[Result]:
        results = []
        for key in keys:
            value = self.data.get(key, [])

            # tests_failures is keyed by test suite
            if isinstance(value, dict):
                entries = [entry for suite in value.values() for entry in suite]
            else:
                entries = value

            for entry in entries:
                message, file, line = _format_entry(key, entry)
                results.append(Result(message=message, category=category, file=file, line=line))
        return results

    @property
    def all_results(self) -> List[Result]:
        """Every entry in the summary, unfiltered"""
        return (
            self._collect(WARNING_KEYS, ResultCategory.WARNING)
            + self._collect(ERROR_KEYS, ResultCategory.ERROR)
            + self._collect(MESSAGE_KEYS, ResultCategory.MESSAGE)
        )

    @property
    def results(self) -> List[Result]:
        """Entries passing the result filter"""
        results = self.all_results
        if self.result_filter is None:
            return results
        return [r for r in results if self.result_filter(r)]

    @property
    def warning_count(self) -> int:
        return sum(1 for r in self.all_results if r.category == ResultCategory.WARNING)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.all_results if r.category == ResultCategory.ERROR)

    def report(self, report: DangerReport) -> None:
        """
        Add the filtered results to a report

        Args:
            report: Report to add annotations to
        """
        results = self.results
        logger.info(
            f"Reporting {len(results)} of {len(self.all_results)} "
            f"build summary entries from {self.file_path}"
        )

        for result in results:
            if result.category == ResultCategory.ERROR:
                report.fail(result.message, result.file, result.line)
            elif result.category == ResultCategory.WARNING:
                report.warn(result.message, result.file, result.line)
            else:
                report.message(result.message, result.file, result.line)
