"""
Shared fixtures for pr_validator tests.
"""

import json
from pathlib import Path

import pytest

from pr_validator.config.settings import Settings
from pr_validator.models.pull_request import FileChanges, PRMetadata


@pytest.fixture
def coverage_json(tmp_path):
    """Pre-exported xccov report with no targets."""
    path = tmp_path / 'coverage.json'
    path.write_text(json.dumps({'targets': []}))
    return path


@pytest.fixture
def settings(tmp_path, coverage_json):
    """Settings whose artifact paths all live under tmp_path."""
    return Settings(
        XCODE_SUMMARY_PATH=str(tmp_path / 'build' / 'reports' / 'errors.json'),
        XCRESULT_PATH=str(tmp_path / 'Example.xcresult'),
        COVERAGE_JSON_PATH=str(coverage_json),
        FAIL_SENTINEL_PATH=str(tmp_path / 'Danger-has-fails.swift'),
        GITHUB_REPOSITORY=None,
        GITHUB_TOKEN=None,
        GITHUB_EVENT_PATH=None,
        DISABLED_CHECKS=[],
        POST_RESULTS_TO_PR=False,
    )


@pytest.fixture
def sentinel(settings):
    return Path(settings.FAIL_SENTINEL_PATH)


def make_pr(**overrides) -> PRMetadata:
    """A well-formed PR that passes every rule unless overridden."""
    fields = dict(
        additions=5,
        deletions=2,
        changed_files=3,
        title='[Login] Fix crash on logout',
        body='Fixes the crash when logging out twice.',
        assignee='octocat',
        number=42,
        files=FileChanges(modified=('Sources/Login/LoginView.swift',), created=()),
    )
    fields.update(overrides)
    return PRMetadata(**fields)


@pytest.fixture
def pr_factory():
    return make_pr
