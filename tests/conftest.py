import pytest

from webindex import IndexingEngine


@pytest.fixture
def engine():
    engine = IndexingEngine()
    engine.on_page_loaded("http://a.example", "Hello World", "foo bar hello")
    engine.on_page_loaded("http://b.example", "Hello there", "baz")
    return engine
