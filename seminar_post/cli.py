#!/usr/bin/env python3
"""
Seminar Post

Build the Markdown announcement for a Socratic seminar meetup from the
comments on a GitHub issue.
"""

import argparse
import logging
import os
import sys

from .comments import BadLinkPolicy, ParseMode, parse_comments
from .config import load_env, read_dotenv
from .errors import SeminarPostError
from .github import fetch_comment_bodies
from .render import MeetupMetadata, render_post, write_post

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger('seminar_post')


def build_parser():
    parser = argparse.ArgumentParser(description='Seminar post generator')
    parser.add_argument('--meetup-number', type=int, required=True, help='Meetup number')
    parser.add_argument('--meetup-date', required=True, help='Meetup date, used in the file name')
    parser.add_argument('--meetup-link', required=True, help='Meetup event link')
    parser.add_argument('--issue-number', type=int, required=True, help='GitHub issue holding the topics')
    parser.add_argument('--repo-org', help='Repository organization (overrides REPO_ORG)')
    parser.add_argument('--repo-name', help='Repository name (overrides REPO_NAME)')
    parser.add_argument('--mode', choices=[m.value for m in ParseMode], default=ParseMode.MULTI.value,
                        help='simple: one link per topic; multi: every line is a link labelled by its domain')
    parser.add_argument('--on-bad-link', choices=[p.value for p in BadLinkPolicy],
                        default=BadLinkPolicy.ABORT.value,
                        help='What to do with a link that is not a valid URL (multi mode)')
    parser.add_argument('--timeout', type=float, help='HTTP timeout in seconds (overrides GH_API_TIMEOUT)')
    parser.add_argument('--output-dir', default='.', help='Directory for the generated post')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def setup_logging(verbose=False):
    level = logging.DEBUG if verbose else getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run(args, environ=None, session=None):
    """Execute the whole pipeline for parsed ``args``. Returns the written path."""
    overrides = {
        'REPO_ORG': args.repo_org,
        'REPO_NAME': args.repo_name,
        'GH_API_TIMEOUT': None if args.timeout is None else str(args.timeout),
    }
    env = load_env(environ=environ, overrides=overrides, dotenv=False)

    metadata = MeetupMetadata(
        number=args.meetup_number,
        date=args.meetup_date,
        link=args.meetup_link,
        group_name=env.meetup_name,
        group_chat_link=env.meetup_chat_link,
    )

    bodies = fetch_comment_bodies(env, args.issue_number, session=session)
    entries = parse_comments(bodies, ParseMode(args.mode), BadLinkPolicy(args.on_bad_link))
    logger.info(f"Rendering {len(entries)} topics")
    text = render_post(metadata, entries)
    return write_post(metadata, text, args.output_dir)


def main(argv=None):
    args = build_parser().parse_args(argv)
    read_dotenv()
    setup_logging(args.verbose)

    try:
        run(args)
    except SeminarPostError as e:
        logger.error(f"Failed at {e.stage} stage: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
