"""
Core enums, error types and URL helpers for webindex
"""

from enum import Enum
from typing import Optional


class Section(Enum):
    """Section of a page an index covers"""
    HEAD = 'head'
    BODY = 'body'


class QuerySyntax(Enum):
    """Surface syntax of a boolean query"""
    PREFIX = 'prefix'
    INFIX = 'infix'


ALL_COMMAND = '/all'


class QuerySyntaxError(ValueError):
    """Raised when a prefix or infix query is malformed"""

    def __init__(self, message: str, query: Optional[str] = None):
        self.message = message
        self.query = query
        if query is not None:
            message = f"{message} (query: {query!r})"
        super().__init__(message)


class DocumentNotFoundError(KeyError):
    """Raised when a URL has never been registered"""

    def __init__(self, url: str):
        self.url = url
        super().__init__(url)

    def __str__(self):
        return f"No document registered for {self.url!r}"


class UrlUtils:
    """Helpers for URLs typed by the user"""

    SCHEMES = ('http://', 'https://')
    FILE_SCHEME = 'file:'

    @staticmethod
    def is_all_command(text: Optional[str]) -> bool:
        """True for the listing command, case-insensitive and trimmed"""
        return text is not None and text.strip().lower() == ALL_COMMAND

    @staticmethod
    def is_local_file(url: str) -> bool:
        return url.lower().startswith(UrlUtils.FILE_SCHEME)

    @staticmethod
    def complete_url(url: str) -> str:
        """
        Prepend "http://" to a typed URL that carries no known scheme.
        Local file URLs are returned untouched.
        """
        url = url.strip()
        if url.startswith(UrlUtils.SCHEMES) or UrlUtils.is_local_file(url):
            return url
        return 'http://' + url
