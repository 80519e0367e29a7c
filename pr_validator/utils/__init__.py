# Utilities Module

from pr_validator.utils.logger import (
    setup_logger,
    log_exception,
    log_validation_result,
    LogContext,
    CustomJsonFormatter,
    ContextFilter
)

from pr_validator.utils.github import GitHubClient, EventPayloadError, load_event_payload
from pr_validator.utils.git_helper import GitHelper, get_git_helper, parse_name_status

__all__ = [
    # Logger utilities
    "setup_logger",
    "log_exception",
    "log_validation_result",
    "LogContext",
    "CustomJsonFormatter",
    "ContextFilter",

    # GitHub
    "GitHubClient",
    "EventPayloadError",
    "load_event_payload",

    # Git utilities
    "GitHelper",
    "get_git_helper",
    "parse_name_status"
]
