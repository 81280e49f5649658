"""
Indexing engine
Entry point for the page loader (pages to index) and the query pane (queries to run)
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from .core import QuerySyntax, QuerySyntaxError, Section, UrlUtils
from .document import Document, DocumentStore
from .index import InvertedIndex
from .preprocessor import HtmlExtractor, TextPreprocessor
from .query_processor import ListingResult, QueryProcessor, QueryResult

logger = logging.getLogger(__name__)

SearchResult = Union[QueryResult, ListingResult]


class IndexingEngine:
    """
    Owns the document store and the head/body indices.
    Each registration (store, head index, body index) runs under one lock,
    and readers take the same lock, so a page is never seen half-indexed.
    """

    def __init__(self, html_encoding: str = 'utf-8'):
        self.preprocessor = TextPreprocessor()
        self.extractor = HtmlExtractor()
        self.store = DocumentStore(self.preprocessor)
        self.head_index = InvertedIndex(Section.HEAD, self.preprocessor)
        self.body_index = InvertedIndex(Section.BODY, self.preprocessor)
        self.query_processor = QueryProcessor(self.head_index, self.body_index, self.preprocessor)
        self.html_encoding = html_encoding

        self.last_result: Optional[SearchResult] = None
        self._lock = threading.RLock()

    # ---------- page loader side ----------

    def on_page_loaded(self, url: Optional[str], head_text: Optional[str],
                       body_text: Optional[str]) -> Optional[Document]:
        """
        Register and index a successfully loaded page.
        Repeated calls for the same URL return the existing document.
        """
        if url is None or not url.strip():
            logger.warning("Ignoring page load without a URL")
            return None

        with self._lock:
            # register() decides dedup; add() is a no-op for an already indexed page
            doc = self.store.register(url, head_text, body_text)
            added = self.head_index.add(doc)
            added = self.body_index.add(doc) or added

        if added:
            logger.info("Indexed %s (%d head words, %d body words)",
                        url, len(doc.head_words), len(doc.body_words))
        else:
            logger.debug("Skipping already indexed page %s", url)
        return doc

    def on_html_loaded(self, url: Optional[str], html: Optional[str]) -> Optional[Document]:
        """Register a page from its raw HTML"""
        # Only avoids parsing a page that is already stored
        existing = self.store.lookup(url) if url else None
        if existing is not None:
            return existing
        head_text, body_text = self.extractor.extract(html)
        return self.on_page_loaded(url, head_text, body_text)

    def load_local_file(self, location: Union[str, Path]) -> Document:
        """
        Index a local HTML file given as a path or a file: URL.
        OSError propagates when the file cannot be read.
        """
        path = self._local_path(location)
        url = path.resolve().as_uri()
        html = path.read_text(encoding=self.html_encoding, errors='replace')
        return self.on_html_loaded(url, html)

    @staticmethod
    def _local_path(location: Union[str, Path]) -> Path:
        if isinstance(location, Path):
            return location
        if UrlUtils.is_local_file(location):
            parsed = urlparse(location)
            return Path(url2pathname(parsed.path))
        return Path(location)

    # ---------- query pane side ----------

    def search(self, text: str, syntax: QuerySyntax = QuerySyntax.PREFIX) -> SearchResult:
        """
        Run a query, or list every page for "/all".
        On QuerySyntaxError the previous result is kept.
        """
        if UrlUtils.is_all_command(text):
            result = self.list_all()
        else:
            try:
                with self._lock:
                    result = self.query_processor.process_boolean_query(text, syntax)
            except QuerySyntaxError as e:
                logger.info("Rejected %s query: %s", syntax.value, e)
                raise

        self.last_result = result
        return result

    def prefix_query(self, text: str) -> SearchResult:
        return self.search(text, QuerySyntax.PREFIX)

    def infix_query(self, text: str) -> SearchResult:
        return self.search(text, QuerySyntax.INFIX)

    def list_all(self) -> ListingResult:
        with self._lock:
            return ListingResult(urls=[doc.url for doc in self.store.all_documents()])

    def document(self, url: str) -> Optional[Document]:
        return self.store.lookup(url)

    def document_summary(self, url: str) -> str:
        """Head and body words of a registered page; DocumentNotFoundError otherwise"""
        return self.store.summary(url)

    def history(self) -> List[str]:
        return self.store.history()

    def stats(self) -> dict:
        with self._lock:
            return {
                'documents': len(self.store),
                'head_terms': len(self.head_index),
                'body_terms': len(self.body_index),
            }
