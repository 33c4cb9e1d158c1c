import sys
from pathlib import Path

import pytest

# Ensure package root on sys.path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from seminar_post.config import Env  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Serves canned responses by URL and records every request."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, timeout=None):
        self.calls.append({'url': url, 'headers': headers, 'timeout': timeout})
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route

    def close(self):
        self.closed = True


@pytest.fixture
def env():
    return Env(
        meetup_name='Bitcoin SP',
        meetup_chat_link='https://chat.example/group',
        gh_api_project_name='seminar-post-tests',
        gh_api_token='ghp_test',
        repo_org='example-org',
        repo_name='meetups',
        api_url='https://api.github.test',
        timeout=5.0,
    )


ISSUE_URL = 'https://api.github.test/repos/example-org/meetups/issues/34'
COMMENTS_URL = 'https://api.github.test/repos/example-org/meetups/issues/34/comments'


@pytest.fixture
def github_session():
    def make(comments, issue_status=200, comments_status=200):
        return FakeSession({
            ISSUE_URL: FakeResponse(issue_status, {'comments_url': COMMENTS_URL}),
            COMMENTS_URL: FakeResponse(comments_status, comments),
        })
    return make
