# Report Rendering Tools

import json
from pathlib import Path
from typing import List, Dict, Any

from pr_validator.models.annotation import Annotation
from pr_validator.models.report import DangerReport
from pr_validator.utils.logger import setup_logger

logger = setup_logger("tools.report_tools")

COMMENT_SIGNATURE = "<!-- pr-validator -->"


class ResultsFileError(Exception):
    """Raised when a results JSON cannot be read"""

_TABLES = (
    ("Fails", ":no_entry_sign:"),
    ("Warnings", ":warning:"),
    ("Messages", ":book:"),
)


def _escape_cell(text: str) -> str:
    """Keep a message on one table row"""
    return text.replace("|", "\\|").replace("\n", "<br />")


def _format_location(annotation: Annotation) -> str:
    if not annotation.file:
        return ""
    if annotation.line is not None:
        return f" `{annotation.file}#L{annotation.line}`"
    return f" `{annotation.file}`"


def render_table(title: str, emoji: str, annotations: List[Annotation]) -> str:
    """
    Render one Danger-style annotation table

    Args:
        title: Table heading
        emoji: Emoji shown in each row
        annotations: Rows to render

    Returns:
        Markdown table, or an empty string when there are no rows
    """
    if not annotations:
        return ""

    lines = [
        "<table>",
        "  <thead>",
        f"    <tr><th width=\"50\"></th><th width=\"100%\">{len(annotations)} {title}</th></tr>",
        "  </thead>",
        "  <tbody>"
    ]
    for annotation in annotations:
        text = _escape_cell(annotation.text) + _format_location(annotation)
        lines.append(f"    <tr><td>{emoji}</td><td>{text}</td></tr>")
    lines.extend(["  </tbody>", "</table>"])
    return "\n".join(lines)


def render_markdown_comment(report: DangerReport) -> str:
    """
    Render a report as a PR comment

    Args:
        report: Validation report

    Returns:
        Markdown comment body
    """
    sections = [
        render_table(title, emoji, annotations)
        for (title, emoji), annotations in zip(
            _TABLES, (report.fails, report.warnings, report.messages)
        )
    ]
    sections.extend(a.text for a in report.markdowns)

    body = "\n\n".join(section for section in sections if section)
    if not body:
        body = ":white_check_mark: All PR checks passed."

    return f"{body}\n\n{COMMENT_SIGNATURE}\n"


def write_results_json(report: DangerReport, path: str) -> Dict[str, Any]:
    """
    Write Danger results JSON

    Args:
        report: Validation report
        path: Output file path

    Returns:
        The written results dictionary
    """
    results = report.to_dict()
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote results to {output}")
    return results


def read_results_json(path: str) -> DangerReport:
    """
    Read Danger results JSON written by an earlier step

    Args:
        path: Results file path

    Returns:
        Report whose failures are marked as pre-existing

    Raises:
        ResultsFileError: If the file is unreadable or not a results document
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ResultsFileError(f"Could not read results {path}: {e}") from e

    if not isinstance(data, dict):
        raise ResultsFileError(f"Results {path} is not a JSON object")

    report = DangerReport.from_dict(data)
    logger.info(f"Loaded {len(report.existing_failures)} existing failure(s) from {path}")
    return report
