"""
Tests for the GitHub REST client against a fake aiohttp session.
"""

import asyncio

import aiohttp
import pytest

from pr_validator.utils import github
from pr_validator.utils.github import FILES_PER_PAGE, GitHubClient


class FakeResponse:
    def __init__(self, status=200, payload=None, text='', error=None):
        self.status = status
        self.payload = payload
        self._text = text
        self.error = error

    async def __aenter__(self):
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def json(self):
        return self.payload

    async def text(self):
        return self._text


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def get(self, url, headers=None, params=None):
        self.calls.append(('GET', url, params))
        return self.responses.pop(0)

    def post(self, url, headers=None, json=None):
        self.calls.append(('POST', url, json))
        return self.responses.pop(0)


@pytest.fixture
def fake_session(monkeypatch):
    def install(*responses):
        session = FakeSession(responses)
        monkeypatch.setattr(github.aiohttp, 'ClientSession', lambda *args, **kwargs: session)
        return session

    return install


def page(start, count):
    return [{'filename': f'Sources/File{i}.swift', 'status': 'modified'} for i in range(start, start + count)]


# ---------------------------------------------------------------------------
# Pull request files
# ---------------------------------------------------------------------------


class TestGetPullRequestFiles:
    def test_single_page(self, fake_session):
        session = fake_session(FakeResponse(payload=page(0, 3)))
        files = asyncio.run(GitHubClient('octo/app').get_pull_request_files(7))

        assert [f['filename'] for f in files] == ['Sources/File0.swift', 'Sources/File1.swift', 'Sources/File2.swift']
        assert session.calls == [
            ('GET', 'https://api.github.com/repos/octo/app/pulls/7/files', {'per_page': FILES_PER_PAGE, 'page': 1})
        ]

    def test_follows_pages_until_short_page(self, fake_session):
        session = fake_session(
            FakeResponse(payload=page(0, FILES_PER_PAGE)),
            FakeResponse(payload=page(FILES_PER_PAGE, 5)),
        )
        files = asyncio.run(GitHubClient('octo/app').get_pull_request_files(7))

        assert len(files) == FILES_PER_PAGE + 5
        assert [call[2]['page'] for call in session.calls] == [1, 2]

    def test_error_status_returns_empty(self, fake_session):
        fake_session(FakeResponse(status=404, text='Not Found'))
        assert asyncio.run(GitHubClient('octo/app').get_pull_request_files(7)) == []

    def test_error_on_later_page_returns_empty(self, fake_session):
        fake_session(
            FakeResponse(payload=page(0, FILES_PER_PAGE)),
            FakeResponse(status=502, text='Bad Gateway'),
        )
        assert asyncio.run(GitHubClient('octo/app').get_pull_request_files(7)) == []

    def test_connection_error_returns_empty(self, fake_session):
        fake_session(FakeResponse(error=aiohttp.ClientConnectionError('refused')))
        assert asyncio.run(GitHubClient('octo/app').get_pull_request_files(7)) == []


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestPostPRComment:
    def test_created(self, fake_session):
        session = fake_session(FakeResponse(status=201))
        assert asyncio.run(GitHubClient('octo/app', token='t0k').post_pr_comment(7, 'All good')) is True
        assert session.calls == [
            ('POST', 'https://api.github.com/repos/octo/app/issues/7/comments', {'body': 'All good'})
        ]

    def test_forbidden(self, fake_session):
        fake_session(FakeResponse(status=403, text='Resource not accessible by integration'))
        assert asyncio.run(GitHubClient('octo/app').post_pr_comment(7, 'All good')) is False

    def test_connection_error(self, fake_session):
        fake_session(FakeResponse(error=aiohttp.ClientConnectionError('refused')))
        assert asyncio.run(GitHubClient('octo/app').post_pr_comment(7, 'All good')) is False
