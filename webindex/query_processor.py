"""
Query processing module
Parses prefix and infix boolean queries into query trees and runs them
against the head and body indices
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .core import QuerySyntax, QuerySyntaxError
from .index import InvertedIndex
from .preprocessor import TextPreprocessor
from .query import And, Or, QueryNode, Term, evaluate, ordered_urls

logger = logging.getLogger(__name__)


def _make_term(preprocessor: TextPreprocessor, text: str, query: str) -> Term:
    """Normalize a raw term, rejecting anything that is not exactly one word"""
    word = preprocessor.normalize_term(text)
    if word is None:
        if not preprocessor.preprocess(text):
            raise QuerySyntaxError(f"Empty term {text!r}", query)
        raise QuerySyntaxError(f"Term {text!r} is not a single word", query)
    return Term(word)


class PrefixQueryParser:
    """
    Recursive descent parser for the functional form:
        query := TERM | and( query (, query)* ) | or( query (, query)* )
    """

    KEYWORDS = (('and(', And), ('or(', Or))

    def __init__(self, preprocessor: Optional[TextPreprocessor] = None):
        self.preprocessor = preprocessor or TextPreprocessor()
        self.query = ''

    def parse(self, query: str) -> QueryNode:
        """Parse a prefix query into a query tree"""
        if query is None or not query.strip():
            raise QuerySyntaxError("Empty query", query)

        self.query = query
        return self._parse_expr(query)

    def _parse_expr(self, text: str) -> QueryNode:
        text = text.strip()
        if not text:
            raise QuerySyntaxError("Empty argument", self.query)

        lowered = text.lower()
        for keyword, node_type in self.KEYWORDS:
            if lowered.startswith(keyword):
                arguments = self._split_arguments(text[len(keyword):])
                return node_type(tuple(self._parse_expr(arg) for arg in arguments))

        return self._parse_term(text)

    def _split_arguments(self, text: str) -> List[str]:
        """
        Split the text following "and(" / "or(" on depth-zero commas,
        up to the matching ")"
        """
        arguments = []
        depth = 0
        start = 0

        for pos, char in enumerate(text):
            if char == '(':
                depth += 1
            elif char == ')':
                if depth == 0:
                    arguments.append(text[start:pos])
                    trailing = text[pos + 1:].strip()
                    if trailing:
                        raise QuerySyntaxError(f"Unexpected text after ')': {trailing!r}", self.query)
                    break
                depth -= 1
            elif char == ',' and depth == 0:
                arguments.append(text[start:pos])
                start = pos + 1
        else:
            raise QuerySyntaxError("Unbalanced parentheses: missing ')'", self.query)

        if len(arguments) == 1 and not arguments[0].strip():
            raise QuerySyntaxError("Operator needs at least one argument", self.query)

        for argument in arguments:
            if not argument.strip():
                raise QuerySyntaxError("Empty argument", self.query)

        return arguments

    def _parse_term(self, text: str) -> Term:
        if ')' in text:
            raise QuerySyntaxError("Unbalanced parentheses: unexpected ')'", self.query)
        for char in '(,':
            if char in text:
                raise QuerySyntaxError(f"Unexpected {char!r} in term {text!r}", self.query)
        return _make_term(self.preprocessor, text, self.query)


class InfixQueryParser:
    """
    Parser for the flat infix form:
        query := term (("AND" | "OR") term)*
    AND binds tighter than OR; operator keywords are case-insensitive.
    """

    OPERATORS = ('AND', 'OR')

    def __init__(self, preprocessor: Optional[TextPreprocessor] = None):
        self.preprocessor = preprocessor or TextPreprocessor()
        self.query = ''
        self.tokens = []
        self.pos = 0

    def parse(self, query: str) -> QueryNode:
        """Parse an infix query into a query tree"""
        self.query = query
        self.tokens = self._tokenize(query)
        self.pos = 0

        if not self.tokens:
            raise QuerySyntaxError("Empty query", query)

        result = self._parse_or_expr()

        if self.pos < len(self.tokens):
            raise QuerySyntaxError(
                f"Missing operator before {self.tokens[self.pos][1]!r}", query
            )

        return result

    def _tokenize(self, query: Optional[str]) -> List[Tuple[str, str]]:
        """Split into ('AND' | 'OR' | 'TERM', text) tokens on whitespace"""
        tokens = []
        for word in (query or '').split():
            for char in '(),':
                if char in word:
                    raise QuerySyntaxError(
                        f"Infix queries have no grouping: unexpected {char!r} in {word!r}", query)
            upper = word.upper()
            if upper in self.OPERATORS:
                tokens.append((upper, word))
            else:
                tokens.append(('TERM', word))
        return tokens

    def _current_token(self):
        """Get current token without consuming"""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _consume(self, expected_type=None):
        """Consume and return current token"""
        token = self._current_token()
        if token is None:
            raise QuerySyntaxError("Query ends with an operator", self.query)
        if expected_type and token[0] != expected_type:
            if self.pos == 0:
                raise QuerySyntaxError(f"Query starts with operator {token[1]!r}", self.query)
            raise QuerySyntaxError(f"Unexpected operator {token[1]!r}", self.query)
        self.pos += 1
        return token

    def _parse_or_expr(self) -> QueryNode:
        """OR of AND-runs (lowest precedence)"""
        groups = [self._parse_and_expr()]

        while self._current_token() and self._current_token()[0] == 'OR':
            self._consume('OR')
            groups.append(self._parse_and_expr())

        if len(groups) == 1:
            return groups[0]
        return Or(tuple(groups))

    def _parse_and_expr(self) -> QueryNode:
        """Maximal run of AND-connected terms"""
        terms = [self._parse_term()]

        while self._current_token() and self._current_token()[0] == 'AND':
            self._consume('AND')
            terms.append(self._parse_term())

        if len(terms) == 1:
            return terms[0]
        return And(tuple(terms))

    def _parse_term(self) -> Term:
        token = self._consume('TERM')
        return _make_term(self.preprocessor, token[1], self.query)


@dataclass(frozen=True)
class QueryResult:
    """URLs matched in each section, sorted ascending"""
    query: str
    tree: QueryNode
    head_urls: List[str]
    body_urls: List[str]


@dataclass(frozen=True)
class ListingResult:
    """Every registered URL, sorted ascending"""
    urls: List[str]


class QueryProcessor:
    """
    Runs boolean queries against the head and body indices.
    The same tree is evaluated once per index.
    """

    def __init__(self, head_index: InvertedIndex, body_index: InvertedIndex,
                 preprocessor: Optional[TextPreprocessor] = None):
        self.head_index = head_index
        self.body_index = body_index
        self.preprocessor = preprocessor or head_index.preprocessor
        self.parsers = {
            QuerySyntax.PREFIX: PrefixQueryParser,
            QuerySyntax.INFIX: InfixQueryParser,
        }

    def parse(self, query: str, syntax: QuerySyntax = QuerySyntax.PREFIX) -> QueryNode:
        # Parsers keep per-call state; build a fresh one per query
        parser = self.parsers[syntax](self.preprocessor)
        return parser.parse(query)

    def run(self, tree: QueryNode, query: str = '') -> QueryResult:
        """Evaluate an already parsed tree against both indices"""
        return QueryResult(
            query=query or str(tree),
            tree=tree,
            head_urls=ordered_urls(evaluate(tree, self.head_index)),
            body_urls=ordered_urls(evaluate(tree, self.body_index)),
        )

    def process_boolean_query(self, query: str,
                              syntax: QuerySyntax = QuerySyntax.PREFIX) -> QueryResult:
        """Parse and evaluate; QuerySyntaxError propagates to the caller"""
        tree = self.parse(query, syntax)
        logger.debug("Parsed %s query %r as %s", syntax.value, query, tree)
        return self.run(tree, query)
