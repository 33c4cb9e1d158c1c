"""Turn raw issue comment bodies into post entries.

A comment body is a title line followed by link lines, separated by CRLF.
Empty lines are ignored.
"""

import ipaddress
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from requests.utils import requote_uri

from .errors import MalformedLink

logger = logging.getLogger(__name__)

LINE_SEPARATOR = '\r\n'

_SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
# WHATWG forbidden host and domain code points, less those urlsplit strips.
FORBIDDEN_HOST_CHARS = frozenset(' #/:<>?@[\\]^|%')


class ParseMode(str, Enum):
    # One link per comment, labelled by the title.
    SIMPLE = 'simple'
    # Every line after the title is a URL, labelled by its host.
    MULTI = 'multi'


class BadLinkPolicy(str, Enum):
    ABORT = 'abort'
    SKIP = 'skip'


@dataclass(frozen=True)
class Link:
    label: str
    url: str


@dataclass(frozen=True)
class ParsedEntry:
    title: str
    links: Tuple[Link, ...]

    @property
    def first_link(self):
        return self.links[0]

    @property
    def extra_links(self):
        return self.links[1:]


def _authority(rest):
    # rest starts with '//'
    authority = rest[2:]
    for delim in '/?#':
        authority = authority.split(delim, 1)[0]
    return authority


def _ascii_netloc(netloc, ascii_host):
    userinfo, at, hostport = netloc.rpartition('@')
    _, colon, port = hostport.partition(':')
    return f"{userinfo}{at}{ascii_host}{colon}{port}"


def parse_link(line):
    """Parse an absolute URL into a ``Link`` labelled by its domain.

    Whitespace in the path, query or fragment is percent-encoded. Non-ASCII
    domains are converted to their IDNA (punycode) form.

    Raises:
        MalformedLink: If ``line`` is not an absolute URL with a domain host
    """
    if not line:
        raise MalformedLink(line, 'not a URL')

    scheme, sep, rest = line.partition(':')
    if not sep or not _SCHEME_RE.match(scheme):
        raise MalformedLink(line, 'relative URL without a scheme')
    if not rest.startswith('//'):
        raise MalformedLink(line, 'missing host')
    if any(ch.isspace() for ch in _authority(rest)):
        raise MalformedLink(line, 'whitespace in host')

    try:
        parts = urlsplit(line)
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        raise MalformedLink(line, str(e))

    host = parts.hostname
    if not host:
        raise MalformedLink(line, 'missing host')
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        raise MalformedLink(line, 'host is an IP address, not a domain')
    if any(ch in FORBIDDEN_HOST_CHARS or ord(ch) < 0x20 or ord(ch) == 0x7f for ch in host):
        raise MalformedLink(line, 'forbidden character in host')

    url = line
    if not host.isascii():
        try:
            host = host.encode('idna').decode('ascii')
        except UnicodeError as e:
            raise MalformedLink(line, f"invalid international domain ({e})")
        url = urlunsplit(parts._replace(netloc=_ascii_netloc(parts.netloc, host)))

    return Link(label=host, url=requote_uri(url))


def link_domain(line):
    """Return the domain name of an absolute URL."""
    return parse_link(line).label


def _multi_links(lines, on_bad_link):
    links = []
    for line in lines:
        try:
            links.append(parse_link(line))
        except MalformedLink as e:
            if on_bad_link == BadLinkPolicy.ABORT:
                raise
            logger.warning(f"Skipping link: {e.message}")
    return links


def parse_comment(body, mode=ParseMode.MULTI, on_bad_link=BadLinkPolicy.ABORT) -> Optional[ParsedEntry]:
    """Parse one comment body.

    Returns ``None`` when the comment has no title, or no usable link, so it
    contributes nothing to the post.

    Raises:
        MalformedLink: In multi mode, for an invalid link line when
            ``on_bad_link`` is ``abort``
    """
    lines = [line for line in body.split(LINE_SEPARATOR) if line]
    if not lines:
        return None

    title = lines[0].strip()
    if not title:
        logger.debug("Comment has a blank title line, skipping")
        return None
    candidates = [line.strip() for line in lines[1:]]
    if not candidates:
        logger.debug(f"Comment {title!r} has no link, skipping")
        return None

    if ParseMode(mode) == ParseMode.SIMPLE:
        return ParsedEntry(title=title, links=(Link(label=title, url=candidates[0]),))

    links = _multi_links(candidates, BadLinkPolicy(on_bad_link))
    if not links:
        logger.warning(f"Comment {title!r} has no valid link, skipping")
        return None
    return ParsedEntry(title=title, links=tuple(links))


def parse_comments(bodies, mode=ParseMode.MULTI, on_bad_link=BadLinkPolicy.ABORT):
    """Parse comment bodies in order, dropping those without an entry."""
    entries = []
    for body in bodies:
        entry = parse_comment(body, mode, on_bad_link)
        if entry is not None:
            entries.append(entry)
    return entries
