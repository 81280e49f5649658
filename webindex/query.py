"""
Query tree and evaluation
A parsed boolean query is a tree of Term, And and Or nodes
"""

from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple, Union

from .document import Document
from .index import InvertedIndex


@dataclass(frozen=True)
class Term:
    """Leaf condition: a single normalized word"""
    word: str

    def __str__(self):
        return self.word


@dataclass(frozen=True)
class And:
    """Documents matching every child"""
    children: Tuple['QueryNode', ...]

    def __post_init__(self):
        if not self.children:
            raise ValueError("And needs at least one child")

    def __str__(self):
        return 'and(' + ','.join(str(c) for c in self.children) + ')'


@dataclass(frozen=True)
class Or:
    """Documents matching any child"""
    children: Tuple['QueryNode', ...]

    def __post_init__(self):
        if not self.children:
            raise ValueError("Or needs at least one child")

    def __str__(self):
        return 'or(' + ','.join(str(c) for c in self.children) + ')'


QueryNode = Union[Term, And, Or]


def evaluate(node: QueryNode, index: InvertedIndex) -> Set[Document]:
    """Evaluate a query tree against one index"""
    if isinstance(node, Term):
        return index.term_matches(node.word)

    if isinstance(node, And):
        results = [evaluate(child, index) for child in node.children]
        # Intersect from the smallest set up
        results.sort(key=len)
        matched = set(results[0])
        for other in results[1:]:
            if not matched:
                break
            matched &= other
        return matched

    if isinstance(node, Or):
        matched = set()
        for child in node.children:
            matched |= evaluate(child, index)
        return matched

    raise TypeError(f"Unknown query node: {node!r}")


def ordered(docs: Iterable[Document]) -> List[Document]:
    """Documents sorted by URL ascending"""
    return sorted(docs, key=lambda d: d.url)


def ordered_urls(docs: Iterable[Document]) -> List[str]:
    return [doc.url for doc in ordered(docs)]
