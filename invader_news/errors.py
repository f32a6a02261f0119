"""Exceptions raised by invader_news.

Skippable mismatches in the news page (unknown containers, paragraphs
without a day marker, paragraphs without identifiers) are never errors;
only failures that stop a run have a type here.
"""


class InvaderNewsError(Exception):
    """Base class for all invader_news errors."""


class NewsParseError(InvaderNewsError):
    """The input could not be read as an HTML document at all."""


class FetchError(InvaderNewsError):
    """The news page could not be fetched after all retries."""


class GitError(InvaderNewsError):
    """A git command failed."""
