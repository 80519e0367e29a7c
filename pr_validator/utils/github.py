# GitHub API Client

import aiohttp
import json
from pathlib import Path
from typing import Dict, Any, List, Optional

from pr_validator.utils.logger import setup_logger

logger = setup_logger("utils.github")

API_VERSION = "2022-11-28"
FILES_PER_PAGE = 100
# GitHub stops listing PR files after this many
MAX_PR_FILES = 3000


class EventPayloadError(Exception):
    """Raised when the CI event payload does not describe a pull request"""


def load_event_payload(path: str) -> Dict[str, Any]:
    """
    Read the ``pull_request`` object from a GitHub event payload

    Args:
        path: Path to the event JSON (``GITHUB_EVENT_PATH``)

    Returns:
        Pull request dictionary

    Raises:
        EventPayloadError: If the file is unreadable or not a pull request event
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise EventPayloadError(f"Could not read event payload {path}: {e}") from e

    pull_request = data.get("pull_request") if isinstance(data, dict) else None
    if not pull_request:
        raise EventPayloadError(f"Event payload {path} has no pull_request object")

    return pull_request


class GitHubClient:
    """Client for interacting with the GitHub REST API"""

    def __init__(self, repository: str, token: Optional[str] = None, api_url: str = "https://api.github.com"):
        """
        Initialize GitHub client

        Args:
            repository: ``owner/name`` of the repository
            token: Token with pull request read (and write for comments) access
            api_url: API base URL
        """
        self.repository = repository
        self.api_base = f"{api_url.rstrip('/')}/repos/{repository}"

        self.headers = {
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': API_VERSION
        }
        if token:
            self.headers['Authorization'] = f'Bearer {token}'

        logger.info(f"Initialized GitHub client for {self.repository}")

    async def get_pull_request_files(self, number: int) -> List[Dict[str, Any]]:
        """
        Get list of files changed in a pull request

        Args:
            number: Pull request number

        Returns:
            File objects with ``filename`` and ``status``, empty on error
        """
        url = f"{self.api_base}/pulls/{number}/files"
        files: List[Dict[str, Any]] = []
        page = 1

        try:
            async with aiohttp.ClientSession() as session:
                while len(files) < MAX_PR_FILES:
                    params = {'per_page': FILES_PER_PAGE, 'page': page}
                    async with session.get(url, headers=self.headers, params=params) as response:
                        if response.status != 200:
                            error_text = await response.text()
                            logger.error(f"Failed to get PR files: {response.status} - {error_text}")
                            return []

                        batch = await response.json()

                    files.extend(batch)
                    if len(batch) < FILES_PER_PAGE:
                        break
                    page += 1

        except aiohttp.ClientError as e:
            logger.error(f"Error fetching PR files for #{number}: {str(e)}")
            return []

        logger.info(f"Found {len(files)} changed files in PR #{number}")
        return files

    async def post_pr_comment(self, number: int, comment: str) -> bool:
        """
        Post a comment on a pull request

        Args:
            number: Pull request number
            comment: Comment text (markdown supported)

        Returns:
            Success status
        """
        url = f"{self.api_base}/issues/{number}/comments"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(url, headers=self.headers, json={"body": comment}) as response:
                    if response.status in [200, 201]:
                        logger.info(f"Successfully posted comment to PR #{number}")
                        return True

                    error_text = await response.text()
                    logger.error(f"Failed to post comment: {response.status} - {error_text}")

                    if response.status == 403:
                        logger.error("Permission denied. The token needs pull-requests: write")
                    return False

        except aiohttp.ClientError as e:
            logger.error(f"Error posting comment to PR #{number}: {str(e)}")
            return False
