# PR Validator Source Module

"""
PR Validator

Pull request rules run by CI on every pull request event: size, description,
title format, assignee, changed files, build/test summary and coverage.

Modules:
- config: Configuration and settings
- models: Annotation, report and pull request models
- tools: Build summary, coverage and report rendering
- utils: Logging, GitHub and git helpers
- validators: Pull request validators
- runner: One validation run as driven by CI
- cli: Command line entry point
"""

__version__ = "1.0.0"
