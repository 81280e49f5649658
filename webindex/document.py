"""
Document store
Owns the canonical, deduplicated set of visited pages keyed by URL
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .core import DocumentNotFoundError, Section
from .preprocessor import TextPreprocessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Document:
    """A visited page. Identity (equality, hashing) is the URL alone."""
    url: str
    head_words: Tuple[str, ...] = field(default=(), compare=False, repr=False)
    body_words: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def words(self, section: Section) -> Tuple[str, ...]:
        """Word sequence of one section"""
        if section is Section.HEAD:
            return self.head_words
        return self.body_words


class DocumentStore:
    """
    Single source of truth for "has this URL already been indexed".
    register() is the only mutation entry point.
    """

    def __init__(self, preprocessor: Optional[TextPreprocessor] = None):
        self.preprocessor = preprocessor or TextPreprocessor()
        self._documents: Dict[str, Document] = {}
        self._history: List[str] = []
        self._lock = threading.RLock()

    def register(self, url: str, head_text: Optional[str], body_text: Optional[str]) -> Document:
        """
        Tokenize both texts and store a new Document under url.
        An already registered url returns the existing Document untouched.
        """
        with self._lock:
            existing = self._documents.get(url)
            if existing is not None:
                logger.debug("Already registered: %s", url)
                return existing

            doc = Document(
                url=url,
                head_words=tuple(self.preprocessor.preprocess(head_text)),
                body_words=tuple(self.preprocessor.preprocess(body_text)),
            )
            self._documents[url] = doc
            self._history.append(url)
            return doc

    def lookup(self, url: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(url)

    def all_documents(self) -> List[Document]:
        """All documents sorted by URL"""
        with self._lock:
            docs = list(self._documents.values())
        return sorted(docs, key=lambda d: d.url)

    def history(self) -> List[str]:
        """URLs in the order they were first registered"""
        with self._lock:
            return list(self._history)

    def summary(self, url: str) -> str:
        """Head and body words of a document, formatted for display"""
        doc = self.lookup(url)
        if doc is None:
            raise DocumentNotFoundError(url)
        head = ' '.join(doc.head_words)
        body = ' '.join(doc.body_words)
        return f"[Words In Head:]\n{head}\n\n[Words In Body:]\n{body}"

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._documents

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
