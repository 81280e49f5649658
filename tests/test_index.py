from webindex import DocumentStore, InvertedIndex, Section


def _docs():
    store = DocumentStore()
    a = store.register("http://a.example", "Hello World", "foo bar hello hello")
    b = store.register("http://b.example", "Hello there", "baz")
    return a, b


def test_head_and_body_indices_are_independent() -> None:
    a, b = _docs()
    head, body = InvertedIndex(Section.HEAD), InvertedIndex(Section.BODY)
    for doc in (a, b):
        head.add(doc)
        body.add(doc)

    assert head.term_matches("hello") == {a, b}
    assert head.term_matches("baz") == set()
    assert body.term_matches("baz") == {b}
    assert body.term_matches("world") == set()


def test_term_matches_is_exact_and_case_insensitive() -> None:
    a, _ = _docs()
    head = InvertedIndex(Section.HEAD)
    head.add(a)
    assert head.term_matches("WORLD") == {a}
    assert head.term_matches("wor") == set()
    assert head.term_matches("worlds") == set()
    assert head.term_matches("") == set()


def test_add_is_idempotent() -> None:
    a, _ = _docs()
    body = InvertedIndex(Section.BODY)
    assert body.add(a) is True
    vocabulary = body.vocabulary()
    assert body.add(a) is False
    assert body.vocabulary() == vocabulary == ["bar", "foo", "hello"]
    assert body.num_docs == 1
    assert a in body


def test_unknown_lookup_does_not_create_keys() -> None:
    a, _ = _docs()
    head = InvertedIndex(Section.HEAD)
    head.add(a)
    head.term_matches("nothing")
    assert "nothing" not in head.vocabulary()
    assert len(head) == 2


def test_document_frequency() -> None:
    a, b = _docs()
    head = InvertedIndex(Section.HEAD)
    head.add(a)
    head.add(b)
    assert head.document_frequency("hello") == 2
    assert head.document_frequency("there") == 1
