"""Runtime configuration read from the environment.

A ``.env`` file in the working directory (or a parent) is loaded first;
variables already set in the real environment win.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigMissing

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_TIMEOUT = 10.0

REQUIRED_VARS = (
    'MEETUP_NAME',
    'MEETUP_CHAT_LINK',
    'GH_API_PROJECT_NAME',
    'GH_API_TOKEN',
    'REPO_ORG',
    'REPO_NAME',
)


def read_dotenv():
    """Load `.env` from the working directory, or the nearest parent that has one."""
    return load_dotenv(find_dotenv(usecwd=True))


@dataclass(frozen=True)
class Env:
    meetup_name: str
    meetup_chat_link: str
    gh_api_project_name: str
    gh_api_token: str
    repo_org: str
    repo_name: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_env(environ=None, overrides=None, dotenv=True):
    """Build the ``Env`` for this run.

    Args:
        environ (mapping, optional): Source of variables, ``os.environ`` by default
        overrides (dict, optional): Values taken from command line flags, keyed
            by variable name. ``None`` values are ignored.
        dotenv (bool): Load ``.env`` from the working directory first

    Raises:
        ConfigMissing: If any required variable is unset or empty
    """
    if dotenv:
        read_dotenv()
    if environ is None:
        environ = os.environ

    values = {name: environ.get(name) for name in REQUIRED_VARS}
    values['GH_API_URL'] = environ.get('GH_API_URL')
    values['GH_API_TIMEOUT'] = environ.get('GH_API_TIMEOUT')
    for name, value in (overrides or {}).items():
        if value is not None:
            values[name] = value

    missing = [name for name in REQUIRED_VARS if not values.get(name)]
    if missing:
        raise ConfigMissing(missing)

    timeout = values['GH_API_TIMEOUT']
    if timeout in (None, ''):
        timeout = DEFAULT_TIMEOUT
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise ConfigMissing(['GH_API_TIMEOUT (must be a number of seconds)'])
    if timeout <= 0:
        raise ConfigMissing(['GH_API_TIMEOUT (must be positive)'])

    return Env(
        meetup_name=values['MEETUP_NAME'],
        meetup_chat_link=values['MEETUP_CHAT_LINK'],
        gh_api_project_name=values['GH_API_PROJECT_NAME'],
        gh_api_token=values['GH_API_TOKEN'],
        repo_org=values['REPO_ORG'],
        repo_name=values['REPO_NAME'],
        api_url=(values['GH_API_URL'] or DEFAULT_API_URL).rstrip('/'),
        timeout=timeout,
    )
