"""
Tests for the xccov coverage reporter.
"""

import json
import subprocess

import pytest

from pr_validator.models.report import DangerReport
from pr_validator.tools import coverage
from pr_validator.tools.coverage import (
    CoverageError,
    XcodeBuildCoverage,
    filter_targets,
    load_xccov_report,
)

XCCOV = {
    'lineCoverage': 0.8,
    'targets': [
        {
            'name': 'Example.app',
            'lineCoverage': 0.9,
            'files': [
                {'name': 'Login.swift', 'path': '/ci/repo/Sources/Login.swift', 'lineCoverage': 0.95},
                {'name': 'Logout.swift', 'path': '/ci/repo/Sources/Logout.swift', 'lineCoverage': 0.4},
                {'name': 'Other.swift', 'path': '/ci/repo/Sources/Other.swift', 'lineCoverage': 0.1},
            ],
        },
        {
            'name': 'Core.framework',
            'lineCoverage': 0.6,
            'files': [
                {'name': 'Store.swift', 'path': '/ci/repo/Core/Store.swift', 'lineCoverage': 0.6},
            ],
        },
        {
            'name': 'ExampleTests.xctest',
            'lineCoverage': 1.0,
            'files': [
                {'name': 'LoginTests.swift', 'path': '/ci/repo/Tests/LoginTests.swift', 'lineCoverage': 1.0},
            ],
        },
    ],
}


class _Completed:
    def __init__(self, returncode=0, stdout='', stderr=''):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TestFilterTargets:
    def test_keeps_touched_files_only(self):
        targets = filter_targets(XCCOV, ['Sources/Login.swift', 'Sources/Logout.swift'], [])
        assert [t.name for t in targets] == ['Example.app']
        assert [f.name for f in targets[0].files] == ['Login.swift', 'Logout.swift']

    def test_excluded_targets_dropped(self):
        targets = filter_targets(XCCOV, ['Tests/LoginTests.swift'], ['ExampleTests.xctest'])
        assert targets == []

    def test_no_edited_files(self):
        assert filter_targets(XCCOV, [], []) == []

    def test_matches_whole_path_segments(self):
        data = {
            'targets': [
                {
                    'name': 'Example.app',
                    'lineCoverage': 0.5,
                    'files': [
                        {'name': 'MyPackage.swift', 'path': '/ci/repo/Sources/MyPackage.swift', 'lineCoverage': 0.5},
                        {'name': 'Package.swift', 'path': '/ci/repo/Package.swift', 'lineCoverage': 0.5},
                    ],
                }
            ]
        }
        targets = filter_targets(data, ['Package.swift'], [])
        assert [f.path for f in targets[0].files] == ['/ci/repo/Package.swift']

    def test_partial_file_name_not_matched(self):
        assert filter_targets(XCCOV, ['gin.swift', 'Sources/Log'], []) == []


class TestLoadReport:
    def test_reads_exported_json(self, tmp_path):
        path = tmp_path / 'coverage.json'
        path.write_text(json.dumps(XCCOV))
        assert load_xccov_report('unused.xcresult', str(path)) == XCCOV

    def test_runs_xccov(self, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return _Completed(stdout=json.dumps(XCCOV))

        monkeypatch.setattr(coverage.subprocess, 'run', fake_run)
        assert load_xccov_report('Example.xcresult') == XCCOV
        assert calls == [['xcrun', 'xccov', 'view', '--report', '--json', 'Example.xcresult']]

    def test_missing_tool_raises(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise FileNotFoundError('xcrun')

        monkeypatch.setattr(coverage.subprocess, 'run', fake_run)
        with pytest.raises(CoverageError):
            load_xccov_report('Example.xcresult')

    def test_timeout_raises(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, 1)

        monkeypatch.setattr(coverage.subprocess, 'run', fake_run)
        with pytest.raises(CoverageError):
            load_xccov_report('Example.xcresult')

    def test_non_zero_exit_raises(self, monkeypatch):
        monkeypatch.setattr(
            coverage.subprocess, 'run', lambda cmd, **kwargs: _Completed(returncode=1, stderr='bad bundle')
        )
        with pytest.raises(CoverageError, match='bad bundle'):
            load_xccov_report('Example.xcresult')


class TestXcodeBuildCoverage:
    @pytest.fixture
    def report_file(self, tmp_path):
        path = tmp_path / 'coverage.json'
        path.write_text(json.dumps(XCCOV))
        return str(path)

    def test_markdown_per_target(self, report_file):
        report = DangerReport()
        XcodeBuildCoverage(report_file).report(
            report, 'Example.xcresult', ['Sources/Login.swift', 'Core/Store.swift'], 70, []
        )
        assert len(report.markdowns) == 2
        assert report.markdowns[0].text.startswith('## Current coverage for Example.app is `90.00%`')
        assert 'Login.swift | 95.00% | :white_check_mark:' in report.markdowns[0].text

    def test_file_below_minimum_flagged(self, report_file):
        report = DangerReport()
        XcodeBuildCoverage(report_file).report(report, 'Example.xcresult', ['Sources/Logout.swift'], 70, [])
        assert 'Logout.swift | 40.00% | :warning:' in report.markdowns[0].text
        assert report.warnings == []

    def test_target_below_minimum_warns(self, report_file):
        report = DangerReport()
        XcodeBuildCoverage(report_file).report(report, 'Example.xcresult', ['Core/Store.swift'], 70, [])
        assert [a.text for a in report.warnings] == [
            'Coverage for Core.framework is 60.00%, below the minimum of 70.00%'
        ]

    def test_failure_when_unavailable(self, tmp_path):
        report = DangerReport()
        XcodeBuildCoverage(str(tmp_path / 'missing.json')).report(
            report, 'Example.xcresult', ['Sources/Login.swift'], 70, []
        )
        assert report.has_failures
        assert report.fails[0].text.startswith('Failed to get the coverage - Error:')

    def test_timeout_passed_to_xccov(self, monkeypatch):
        timeouts = []

        def fake_run(cmd, **kwargs):
            timeouts.append(kwargs['timeout'])
            return _Completed(stdout=json.dumps(XCCOV))

        monkeypatch.setattr(coverage.subprocess, 'run', fake_run)
        XcodeBuildCoverage(timeout=7).report(DangerReport(), 'Example.xcresult', ['Sources/Login.swift'], 70, [])
        assert timeouts == [7]
