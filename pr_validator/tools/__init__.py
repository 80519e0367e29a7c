# Tools Module

from pr_validator.tools.xcode_summary import XcodeSummary, Result, ResultCategory
from pr_validator.tools.coverage import XcodeBuildCoverage, CoverageError, load_xccov_report
from pr_validator.tools.report_tools import (
    render_markdown_comment,
    write_results_json,
    read_results_json,
    ResultsFileError
)

__all__ = [
    # Build summary
    "XcodeSummary",
    "Result",
    "ResultCategory",

    # Coverage
    "XcodeBuildCoverage",
    "CoverageError",
    "load_xccov_report",

    # Reports
    "render_markdown_comment",
    "write_results_json",
    "read_results_json",
    "ResultsFileError"
]
