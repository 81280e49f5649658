"""
Inverted Index implementation
One instance covers one section (head or body) of every registered page
"""

import logging
import threading
from collections import defaultdict
from typing import Dict, List, Optional, Set

from .core import Section
from .document import Document
from .preprocessor import TextPreprocessor

logger = logging.getLogger(__name__)


class InvertedIndex:
    """
    Maps a normalized word to the set of documents containing it in one section.
    Documents are owned by the DocumentStore; the index only refers to them.
    """

    def __init__(self,
                 section: Section = Section.BODY,
                 preprocessor: Optional[TextPreprocessor] = None):

        self.section = section
        self.preprocessor = preprocessor or TextPreprocessor()

        self.index: Dict[str, Set[Document]] = defaultdict(set)
        self._indexed_urls: Set[str] = set()
        self._lock = threading.RLock()

    def add(self, doc: Document) -> bool:
        """
        Add every distinct word of the document's section.
        Returns False (and changes nothing) if the document was already added.
        """
        with self._lock:
            if doc.url in self._indexed_urls:
                return False

            for term in set(doc.words(self.section)):
                self.index[term].add(doc)
            self._indexed_urls.add(doc.url)

        logger.debug("Indexed %s words of %s", self.section.value, doc.url)
        return True

    def term_matches(self, word: str) -> Set[Document]:
        """Documents containing exactly this word (case-insensitive)"""
        term = self.preprocessor.normalize_term(word)
        if term is None:
            return set()

        with self._lock:
            # .get() so unknown words never create empty keys
            postings = self.index.get(term)
            return set(postings) if postings else set()

    def vocabulary(self) -> List[str]:
        """Indexed words, sorted"""
        with self._lock:
            return sorted(self.index)

    def document_frequency(self, word: str) -> int:
        return len(self.term_matches(word))

    @property
    def num_docs(self) -> int:
        with self._lock:
            return len(self._indexed_urls)

    def __contains__(self, doc: Document) -> bool:
        with self._lock:
            return doc.url in self._indexed_urls

    def __len__(self) -> int:
        with self._lock:
            return len(self.index)
