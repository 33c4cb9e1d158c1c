"""
Seminar Post
============

Generate the Markdown announcement for a Socratic seminar meetup from the
comments on a GitHub issue.

Each comment becomes one topic: its first line is the title, the following
lines are links. The post is written to ``{date}-socratic-seminar-{number}.md``.
"""

__version__ = "1.0.0"
__author__ = "Seminar Post"

from .cli import main

__all__ = ["main"]
