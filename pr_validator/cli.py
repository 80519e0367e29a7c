# Command Line Entry Point

"""
PR Validator CLI

Usage:
    pr-validator run            - Validate the pull request of the current CI event
    pr-validator render FILE    - Render a results JSON as the PR comment markdown
"""

import sys
from typing import Optional

import click
from pydantic import ValidationError

from pr_validator import __version__
from pr_validator.config.settings import get_settings
from pr_validator.models.report import DangerReport
from pr_validator.runner import PRValidationRun
from pr_validator.tools.report_tools import render_markdown_comment, read_results_json, ResultsFileError
from pr_validator.utils.github import EventPayloadError
from pr_validator.utils.logger import setup_logger

logger = setup_logger("cli")


def echo_report(report: DangerReport) -> None:
    """Print annotations one per line, failures first"""
    for annotation in report.fails:
        click.echo(f"FAIL: {annotation.text}")
    for annotation in report.warnings:
        click.echo(f"WARN: {annotation.text}")
    for annotation in report.messages:
        click.echo(f"MESSAGE: {annotation.text}")
    for annotation in report.markdowns:
        click.echo(annotation.text)


@click.group()
@click.version_option(version=__version__, prog_name='pr-validator')
def cli():
    """PR Validator - Pull request rules for CI"""
    pass


@cli.command()
@click.option('--event', 'event_path', type=click.Path(dir_okay=False), default=None,
              help='GitHub event payload (defaults to GITHUB_EVENT_PATH)')
@click.option('--output', 'output_path', type=click.Path(dir_okay=False), default=None,
              help='Write Danger results JSON to this file')
@click.option('--previous-results', 'previous_results_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='Results JSON whose failures carry over into this run')
@click.option('--post-comment/--no-post-comment', default=None,
              help='Post the report on the PR (defaults to POST_RESULTS_TO_PR)')
def run(event_path: Optional[str], output_path: Optional[str], previous_results_path: Optional[str],
        post_comment: Optional[bool]):
    """Validate the pull request and exit non-zero when failures were recorded"""
    try:
        validation = PRValidationRun(get_settings())
        pr = validation.load_pr_metadata(event_path)
        report = validation.run(
            pr,
            output_path=output_path,
            previous_results_path=previous_results_path,
            post_comment=post_comment
        )
    except (ValidationError, EventPayloadError, ResultsFileError) as e:
        logger.error(f"Cannot run validation: {e}")
        raise click.ClickException(str(e))

    echo_report(report)

    if report.has_failures:
        sys.exit(1)


@cli.command()
@click.argument('results_path', type=click.Path(exists=True, dir_okay=False))
def render(results_path: str):
    """Render a results JSON as the PR comment markdown"""
    try:
        report = read_results_json(results_path)
    except ResultsFileError as e:
        logger.error(f"Cannot render results: {e}")
        raise click.ClickException(str(e))

    click.echo(render_markdown_comment(report))


def main():
    cli()


if __name__ == '__main__':
    main()
