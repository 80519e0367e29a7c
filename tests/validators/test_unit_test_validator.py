"""
Tests for the build summary and coverage checks.
"""

import json
import subprocess
from pathlib import Path

from pr_validator.models.annotation import AnnotationLevel
from pr_validator.tools import coverage
from pr_validator.validators.pr_validator import PRValidator
from pr_validator.validators.unit_test_validator import UnitTestValidator


def write_summary(settings, data):
    path = Path(settings.XCODE_SUMMARY_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


class TestBuildSummaryCheck:
    def test_missing_summary_is_skipped(self, settings, pr_factory):
        assert UnitTestValidator(settings).check_build_summary(pr_factory()) == []

    def test_warnings_are_not_reported(self, settings, pr_factory):
        write_summary(settings, {
            'warnings': ['Unused variable'],
            'errors': ['Build failed'],
            'tests_summary_messages': ['Executed 3 tests'],
        })
        annotations = UnitTestValidator(settings).check_build_summary(pr_factory())
        assert [(a.level, a.text) for a in annotations] == [
            (AnnotationLevel.FAILURE, 'Build failed'),
            (AnnotationLevel.MESSAGE, 'Executed 3 tests'),
        ]

    def test_unreadable_summary_is_skipped(self, settings, pr_factory):
        write_summary(settings, '{not json')
        assert UnitTestValidator(settings).check_build_summary(pr_factory()) == []

    def test_build_errors_mark_sentinel(self, settings, pr_factory, sentinel):
        write_summary(settings, {'errors': ['Build failed']})
        report = PRValidator(settings).validate(pr_factory())
        assert [a.text for a in report.fails] == ['Build failed']
        assert sentinel.exists()


class TestCoverageCheck:
    def test_uses_edited_files(self, settings, pr_factory, coverage_json):
        coverage_json.write_text(json.dumps({
            'targets': [
                {
                    'name': 'Example.app',
                    'lineCoverage': 0.5,
                    'files': [
                        {
                            'name': 'LoginView.swift',
                            'path': '/ci/repo/Sources/Login/LoginView.swift',
                            'lineCoverage': 0.5,
                        }
                    ],
                }
            ]
        }))
        annotations = UnitTestValidator(settings).check_coverage(pr_factory())
        levels = [a.level for a in annotations]
        assert levels == [AnnotationLevel.MARKDOWN, AnnotationLevel.WARNING]

    def test_unavailable_coverage_fails(self, settings, pr_factory, tmp_path):
        settings.COVERAGE_JSON_PATH = str(tmp_path / 'missing.json')
        annotations = UnitTestValidator(settings).check_coverage(pr_factory())
        assert len(annotations) == 1
        assert annotations[0].level == AnnotationLevel.FAILURE
        assert annotations[0].text.startswith('Failed to get the coverage - Error:')

    def test_disabled_coverage(self, settings, pr_factory, tmp_path):
        settings.COVERAGE_JSON_PATH = str(tmp_path / 'missing.json')
        settings.DISABLED_CHECKS = ['coverage']
        assert UnitTestValidator(settings).run_checks(pr_factory()) == []

    def test_command_timeout_from_settings(self, settings, pr_factory, monkeypatch):
        timeouts = []

        def fake_run(cmd, **kwargs):
            timeouts.append(kwargs['timeout'])
            return subprocess.CompletedProcess(cmd, 0, stdout=json.dumps({'targets': []}), stderr='')

        monkeypatch.setattr(coverage.subprocess, 'run', fake_run)
        settings.COVERAGE_JSON_PATH = None
        settings.COMMAND_TIMEOUT = 9
        assert UnitTestValidator(settings).check_coverage(pr_factory()) == []
        assert timeouts == [9]
