"""Render the seminar announcement post and write it to disk."""

import logging
import os
from dataclasses import dataclass

from .errors import FileIoError

logger = logging.getLogger(__name__)

FILE_NAME_INFIX = 'socratic-seminar-'

POST_TEMPLATE = (
    '---\n'
    'layout: post\n'
    'type: socratic\n'
    'title: "Seminário Socrático {number}"\n'
    'meetup: {link}\n'
    '---\n'
    '\n'
    '## Avisos\n'
    '\n'
    '- Entrem no grupo do Whatsapp [{group_name}]({group_chat_link})!\n'
    '- Respeite a privacidade dos participantes.\n'
    '- Os meetups nunca são gravados. Queremos todos a vontade para participar'
    ' e discutir os assuntos programados, de forma anônima se assim o desejarem.\n'
    '\n'
    '## Agradecimentos\n'
    '\n'
    '- Agradecemos à Vinteum pela casa, comidas e bebidas.\n'
    '\n'
    '## Cronograma\n'
    '\n'
)

SUB_BULLET_INDENT = '    '


@dataclass(frozen=True)
class MeetupMetadata:
    number: int
    date: str
    link: str
    group_name: str
    group_chat_link: str


def post_filename(metadata):
    return f"{metadata.date}-{FILE_NAME_INFIX}{metadata.number}.md"


def render_header(metadata):
    return POST_TEMPLATE.format(
        number=metadata.number,
        link=metadata.link,
        group_name=metadata.group_name,
        group_chat_link=metadata.group_chat_link,
    )


def render_entries(entries):
    lines = []
    for entry in entries:
        lines.append(f"* [{entry.title}]({entry.first_link.url})\n")
        for link in entry.extra_links:
            lines.append(f"{SUB_BULLET_INDENT}- [{link.label}]({link.url})\n")
    return ''.join(lines)


def render_post(metadata, entries):
    """Render the full Markdown post. Pure; the same input gives the same text."""
    return render_header(metadata) + render_entries(entries)


def write_post(metadata, text, output_dir='.'):
    """Write ``text`` to the post file, replacing any previous content.

    Returns:
        str: Path of the written file

    Raises:
        FileIoError: If the file cannot be created or written
    """
    path = os.path.join(output_dir, post_filename(metadata))
    try:
        with open(path, 'w', encoding='utf-8', newline='\n') as fh:
            fh.write(text)
    except OSError as e:
        raise FileIoError(path, e)

    logger.info(f"Wrote {path}")
    return path
