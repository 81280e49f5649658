"""
Text preprocessing module
Handles tokenization of extracted page text and splitting HTML into head/body text
"""

import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from nltk.tokenize import RegexpTokenizer


class TextPreprocessor:
    """Handles text preprocessing: lowercasing, character stripping, tokenization"""

    def __init__(self):
        self.tokenizer = RegexpTokenizer(r'\w+')

    def preprocess(self, text: Optional[str]) -> List[str]:
        """
        Preprocess text: lowercase, drop characters outside the word set, tokenize.
        Duplicates are kept in source order.
        """
        if not text:
            return []

        # The \w+ tokenizer treats every non-word character as a separator
        return self.tokenizer.tokenize(text.lower())

    def normalize_term(self, term: Optional[str]) -> Optional[str]:
        """
        Normalize a single query term.
        Returns None unless the term yields exactly one word.
        """
        tokens = self.preprocess(term)
        if len(tokens) != 1:
            return None
        return tokens[0]


class HtmlExtractor:
    """Splits an HTML page into the text of its head and body sections"""

    HIDDEN_TAGS = ['script', 'style', 'noscript', 'template']
    META_NAMES = ('keywords', 'description')

    def extract(self, html: Optional[str]) -> Tuple[str, str]:
        """Return (head_text, body_text) for an HTML document"""
        if not html:
            return '', ''

        soup = BeautifulSoup(html, 'html.parser')

        head_parts = []
        head = soup.head
        if head is not None:
            for meta in head.find_all('meta'):
                name = (meta.get('name') or '').lower()
                if name in self.META_NAMES and meta.get('content'):
                    head_parts.append(meta['content'])
            self._strip_hidden(head)
            head_parts.insert(0, head.get_text(separator=' '))
            head.extract()

        self._strip_hidden(soup)
        body = soup.body if soup.body is not None else soup
        body_text = body.get_text(separator=' ')

        return self._collapse(' '.join(head_parts)), self._collapse(body_text)

    def _strip_hidden(self, node):
        for tag in node(self.HIDDEN_TAGS):
            tag.extract()

    @staticmethod
    def _collapse(text: str) -> str:
        return re.sub(r'\s+', ' ', text).strip()
