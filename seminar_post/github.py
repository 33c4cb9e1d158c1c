"""Fetch the comment bodies of a single GitHub issue."""

import logging

import requests

from .errors import (
    InvalidHeaderValue,
    MalformedResponse,
    TransportError,
    UnexpectedStatus,
)

logger = logging.getLogger(__name__)

ACCEPT_VALUE = 'application/vnd.github+json'
AUTH_SCHEMES = ('bearer ', 'token ')


def _check_header(name, value):
    if value != value.strip() or any(ord(ch) < 0x20 and ch != '\t' or ord(ch) == 0x7f for ch in value):
        raise InvalidHeaderValue(name)
    try:
        value.encode('ascii')
    except UnicodeEncodeError:
        raise InvalidHeaderValue(name)
    return value


def build_headers(env):
    """Request headers for the GitHub REST API.

    A bare token is sent with the ``Bearer`` scheme; a value that already
    names its scheme is sent unchanged.
    """
    token = env.gh_api_token
    if not token.lower().startswith(AUTH_SCHEMES):
        token = f'Bearer {token}'

    return {
        'User-Agent': _check_header('User-Agent', env.gh_api_project_name),
        'Authorization': _check_header('Authorization', token),
        'Accept': ACCEPT_VALUE,
    }


def issue_url(env, issue_number):
    return f"{env.api_url}/repos/{env.repo_org}/{env.repo_name}/issues/{issue_number}"


def _get_json(session, url, headers, timeout):
    try:
        response = session.get(url, headers=headers, timeout=timeout)
    except requests.exceptions.InvalidHeader as e:
        raise InvalidHeaderValue(f"Authorization or User-Agent ({e})")
    except requests.exceptions.RequestException as e:
        raise TransportError(url, e)

    if response.status_code != 200:
        raise UnexpectedStatus(url, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(url, f"body is not JSON ({e})")


def fetch_comment_bodies(env, issue_number, session=None):
    """Return the bodies of every comment on an issue, in API order.

    Args:
        env (Env): Runtime configuration
        issue_number (int): Issue number within ``env.repo_org/env.repo_name``
        session (requests.Session, optional): Session to use. A new one is
            created and closed when omitted.

    Raises:
        InvalidHeaderValue: If the credential or client name cannot be sent
        TransportError: If a request fails before a response arrives
        UnexpectedStatus: If either call does not return 200
        MalformedResponse: If a JSON body does not have the expected shape
    """
    headers = build_headers(env)
    own_session = session is None
    if own_session:
        session = requests.Session()

    try:
        url = issue_url(env, issue_number)
        logger.info(f"Fetching issue #{issue_number} from {env.repo_org}/{env.repo_name}...")
        issue = _get_json(session, url, headers, env.timeout)

        comments_url = issue.get('comments_url') if isinstance(issue, dict) else None
        if not isinstance(comments_url, str):
            raise MalformedResponse(url, "missing 'comments_url'")

        comments = _get_json(session, comments_url, headers, env.timeout)
        if not isinstance(comments, list):
            raise MalformedResponse(comments_url, 'expected a list of comments')

        bodies = []
        for i, comment in enumerate(comments):
            body = comment.get('body') if isinstance(comment, dict) else None
            if not isinstance(body, str):
                raise MalformedResponse(comments_url, f"comment {i} has no 'body'")
            bodies.append(body)
    finally:
        if own_session:
            session.close()

    logger.info(f"Fetched {len(bodies)} comments")
    return bodies
