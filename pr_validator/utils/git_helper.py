# Git Helper Utilities

import subprocess
from typing import List, Optional
from pathlib import Path

from pr_validator.models.pull_request import FileChanges
from pr_validator.utils.logger import setup_logger

logger = setup_logger("utils.git_helper")

DEFAULT_TIMEOUT = 120  # seconds


class GitHelper:
    """Helper class for Git operations"""

    def __init__(self, repo_path: str = ".", timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize Git helper

        Args:
            repo_path: Path to git repository
            timeout: Seconds to wait for each git command
        """
        self.repo_path = Path(repo_path).resolve()
        self.timeout = timeout
        self.logger = logger

    def run_git_command(self, command: List[str]) -> tuple[str, str, int]:
        """
        Run a git command and return output

        Args:
            command: Git command as list of arguments

        Returns:
            Tuple of (stdout, stderr, return_code)
        """
        cmd = ["git"] + command
        self.logger.debug(f"Running git command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            self.logger.error(f"Git command timed out: {' '.join(command)}")
            return "", "Command timed out", 1
        except OSError as e:
            self.logger.error(f"Error running git command: {str(e)}")
            return "", str(e), 1

        return result.stdout, result.stderr, result.returncode

    def get_changed_files(self, base_ref: str = "main", head_ref: str = "HEAD") -> FileChanges:
        """
        Get files changed between the merge base of two refs and the head

        Args:
            base_ref: Base branch or ref to compare against
            head_ref: Head ref

        Returns:
            Grouped file changes, empty if git fails
        """
        stdout, stderr, code = self.run_git_command([
            "diff",
            "--name-status",
            f"{base_ref}...{head_ref}"
        ])

        if code != 0:
            self.logger.error(f"Failed to get diff: {stderr}")
            return FileChanges()

        changes = parse_name_status(stdout)
        self.logger.info(
            f"Found {len(changes.modified)} modified and {len(changes.created)} created files "
            f"between {base_ref} and {head_ref}"
        )
        return changes


def parse_name_status(output: str) -> FileChanges:
    """
    Parse ``git diff --name-status`` output

    Args:
        output: Raw command output

    Returns:
        Grouped file changes; renames and copies count as modified at the new path
    """
    modified, created, deleted = [], [], []

    for line in output.splitlines():
        if not line.strip():
            continue

        parts = line.split('\t')
        if len(parts) < 2:
            continue

        status = parts[0][0]
        file_path = parts[-1]

        if status == 'A':
            created.append(file_path)
        elif status == 'D':
            deleted.append(file_path)
        else:
            modified.append(file_path)

    return FileChanges(tuple(modified), tuple(created), tuple(deleted))


# Singleton instance
_git_helper: Optional[GitHelper] = None


def get_git_helper(repo_path: str = ".", timeout: int = DEFAULT_TIMEOUT) -> GitHelper:
    """
    Get or create GitHelper instance

    Args:
        repo_path: Repository path
        timeout: Seconds to wait for each git command

    Returns:
        GitHelper instance
    """
    global _git_helper
    if (
        _git_helper is None
        or _git_helper.repo_path != Path(repo_path).resolve()
        or _git_helper.timeout != timeout
    ):
        _git_helper = GitHelper(repo_path, timeout)
    return _git_helper
