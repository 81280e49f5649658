import pytest

from webindex import Document, DocumentNotFoundError, DocumentStore, Section


def test_register_tokenizes_both_sections() -> None:
    store = DocumentStore()
    doc = store.register("http://a.example", "Hello World", "foo bar hello")
    assert doc.head_words == ("hello", "world")
    assert doc.body_words == ("foo", "bar", "hello")
    assert doc.words(Section.HEAD) == doc.head_words
    assert doc.words(Section.BODY) == doc.body_words


def test_register_same_url_returns_existing_document() -> None:
    store = DocumentStore()
    first = store.register("http://a.example", "one", "two")
    second = store.register("http://a.example", "different", "text")
    assert second is first
    assert second.head_words == ("one",)
    assert len(store) == 1


def test_urls_are_case_sensitive() -> None:
    store = DocumentStore()
    store.register("http://A.example", "", "")
    store.register("http://a.example", "", "")
    assert len(store) == 2


def test_lookup_and_contains() -> None:
    store = DocumentStore()
    doc = store.register("http://a.example", None, None)
    assert store.lookup("http://a.example") is doc
    assert store.lookup("http://missing.example") is None
    assert "http://a.example" in store
    assert doc.head_words == ()


def test_all_documents_sorted_by_url_and_history_in_visit_order() -> None:
    store = DocumentStore()
    for url in ["http://c.example", "http://a.example", "http://b.example"]:
        store.register(url, "", "")
    store.register("http://a.example", "", "")
    assert [d.url for d in store.all_documents()] == [
        "http://a.example", "http://b.example", "http://c.example"]
    assert store.history() == ["http://c.example", "http://a.example", "http://b.example"]


def test_summary() -> None:
    store = DocumentStore()
    store.register("http://a.example", "Hello World", "foo bar")
    assert store.summary("http://a.example") == (
        "[Words In Head:]\nhello world\n\n[Words In Body:]\nfoo bar")
    with pytest.raises(DocumentNotFoundError):
        store.summary("http://missing.example")


def test_document_identity_is_url() -> None:
    assert Document("http://a.example", ("x",)) == Document("http://a.example", ("y",))
    assert len({Document("http://a.example"), Document("http://a.example", ("z",))}) == 1
