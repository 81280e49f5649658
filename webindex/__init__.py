"""
webindex: indexing and boolean retrieval of visited web pages
Every page the browser loads is indexed by head and body words and can be
found again with prefix (and(a,b)) or infix (a AND b) boolean queries
"""

from .core import (
    Section, QuerySyntax, QuerySyntaxError, DocumentNotFoundError, UrlUtils
)
from .preprocessor import TextPreprocessor, HtmlExtractor
from .document import Document, DocumentStore
from .index import InvertedIndex
from .query import Term, And, Or, evaluate, ordered_urls
from .query_processor import (
    PrefixQueryParser, InfixQueryParser, QueryProcessor, QueryResult, ListingResult
)
from .engine import IndexingEngine
from .metrics import MetricsCollector, Reporter
from .index_builder import IndexBuilder, TestQueryGenerator

__version__ = "1.0.0"
__all__ = [
    "Section",
    "QuerySyntax",
    "QuerySyntaxError",
    "DocumentNotFoundError",
    "UrlUtils",
    "TextPreprocessor",
    "HtmlExtractor",
    "Document",
    "DocumentStore",
    "InvertedIndex",
    "Term",
    "And",
    "Or",
    "evaluate",
    "ordered_urls",
    "PrefixQueryParser",
    "InfixQueryParser",
    "QueryProcessor",
    "QueryResult",
    "ListingResult",
    "IndexingEngine",
    "MetricsCollector",
    "Reporter",
    "IndexBuilder",
    "TestQueryGenerator",
]
