"""
Index builder and query generator module
Bulk-loads saved HTML pages into an engine and generates sample queries
"""

import logging
import time
import zipfile
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .core import QuerySyntax
from .engine import IndexingEngine
from .index import InvertedIndex

logger = logging.getLogger(__name__)

HTML_SUFFIXES = ('.html', '.htm')


class IndexBuilder:
    """
    Feeds saved HTML pages to an IndexingEngine, as if each had just been loaded
    """

    def __init__(self, engine: IndexingEngine):
        self.engine = engine

    def build_from_path(self, path: Union[str, Path], max_docs: Optional[int] = None) -> int:
        """
        Index every HTML file under a directory (recursively) or inside a zip.
        Returns the number of newly registered pages.
        """
        path = Path(path)
        start_time = time.time()
        before = len(self.engine.store)

        if path.is_dir():
            candidates = sorted(p for p in path.rglob('*') if p.is_file())
            logger.info("Found %d files under %s", len(candidates), path)
        else:
            candidates = [path]

        for candidate in candidates:
            if max_docs and len(self.engine.store) - before >= max_docs:
                break

            suffix = candidate.suffix.lower()

            # --- Case 1: HTML file ---
            if suffix in HTML_SUFFIXES:
                try:
                    self.engine.load_local_file(candidate)
                except OSError as e:
                    logger.warning("Failed reading %s: %s", candidate, e)

            # --- Case 2: ZIP archive ---
            elif suffix == '.zip':
                self._build_from_zip(candidate, before, max_docs)

        added = len(self.engine.store) - before
        logger.info("Indexed %d pages in %.2fs", added, time.time() - start_time)
        return added

    def _build_from_zip(self, path: Path, before: int, max_docs: Optional[int]):
        archive_url = path.resolve().as_uri()
        try:
            with zipfile.ZipFile(path, 'r') as zf:
                for name in sorted(zf.namelist()):
                    if not name.lower().endswith(HTML_SUFFIXES):
                        continue
                    if max_docs and len(self.engine.store) - before >= max_docs:
                        break
                    try:
                        with zf.open(name) as fh:
                            html = fh.read().decode(self.engine.html_encoding, errors='replace')
                    except (OSError, zipfile.BadZipFile) as e:
                        logger.warning("Failed reading %s in %s: %s", name, path, e)
                        continue
                    self.engine.on_html_loaded(f"{archive_url}!/{name}", html)
        except (OSError, zipfile.BadZipFile) as e:
            logger.warning("Could not open ZIP %s: %s", path, e)


class TestQueryGenerator:
    """Generate well-formed boolean queries from an index vocabulary"""

    __test__ = False

    @staticmethod
    def generate_queries(index: InvertedIndex,
                         num_queries: int = 50,
                         syntax: QuerySyntax = QuerySyntax.PREFIX,
                         seed: Optional[int] = None) -> List[str]:
        """
        Queries cycle through five patterns built from the most common terms:
        single term, a AND b, a OR b, a AND b AND c, a AND (b OR c)
        """
        rng = np.random.default_rng(seed)

        # Operator words would be read as operators in infix form
        term_freq = [(term, len(docs)) for term, docs in index.index.items()
                     if term not in ('and', 'or')]
        term_freq.sort(key=lambda x: (-x[1], x[0]))
        common_terms = [t[0] for t in term_freq[:max(3, len(term_freq) // 10)]]

        if not common_terms:
            return []

        def pick(n):
            replace = len(common_terms) < n
            return [str(t) for t in rng.choice(common_terms, n, replace=replace)]

        queries = []
        for i in range(num_queries):
            query_type = i % 5

            if query_type == 0:
                t1, = pick(1)
                queries.append(t1)

            elif query_type == 1:
                t1, t2 = pick(2)
                queries.append(f'and({t1},{t2})' if syntax is QuerySyntax.PREFIX
                               else f'{t1} AND {t2}')

            elif query_type == 2:
                t1, t2 = pick(2)
                queries.append(f'or({t1},{t2})' if syntax is QuerySyntax.PREFIX
                               else f'{t1} OR {t2}')

            elif query_type == 3:
                t1, t2, t3 = pick(3)
                queries.append(f'and({t1},{t2},{t3})' if syntax is QuerySyntax.PREFIX
                               else f'{t1} AND {t2} AND {t3}')

            else:
                t1, t2, t3 = pick(3)
                # Infix has no grouping, so distribute: (a AND b) OR (a AND c)
                queries.append(f'and({t1},or({t2},{t3}))' if syntax is QuerySyntax.PREFIX
                               else f'{t1} AND {t2} OR {t1} AND {t3}')

        return queries
