import io

from webindex import QuerySyntax
from webindex.cli import handle_command, repl


def test_prefix_and_infix_commands(engine) -> None:
    out = handle_command(engine, "prefix and(hello,world)")
    assert out == "[Head matches]\nhttp://a.example\n\n[Body matches]\n(none)"
    out = handle_command(engine, "infix hello AND world OR baz")
    assert "http://b.example" in out.split("[Body matches]")[1]


def test_default_syntax_used_for_bare_lines(engine) -> None:
    assert "http://b.example" in handle_command(engine, "baz", QuerySyntax.INFIX)
    assert handle_command(engine, "hello world", QuerySyntax.INFIX).startswith("Syntax error")


def test_syntax_error_shows_previous_results(engine) -> None:
    handle_command(engine, "/all")
    out = handle_command(engine, "prefix and(hello")
    assert out.startswith("Syntax error")
    assert out.endswith("[All pages]\nhttp://a.example\nhttp://b.example")


def test_show_history_stats_and_help(engine) -> None:
    assert handle_command(engine, "show http://a.example").startswith("[Words In Head:]")
    assert "No document registered" in handle_command(engine, "show http://x.example")
    assert handle_command(engine, "history") == "http://a.example\nhttp://b.example"
    assert "Documents:" in handle_command(engine, "stats")
    assert "Commands:" in handle_command(engine, "help")
    assert handle_command(engine, "quit") is None


def test_open_local_file(engine, tmp_path) -> None:
    page = tmp_path / "p.html"
    page.write_text("<body>kiwi</body>", encoding="utf-8")
    assert handle_command(engine, f"open {page}").startswith("Indexed file:")
    assert page.resolve().as_uri() in handle_command(engine, "kiwi")
    assert "http://example.com" in handle_command(engine, "open example.com")


def test_repl_stops_on_quit(engine) -> None:
    stdout = io.StringIO()
    repl(engine, QuerySyntax.PREFIX, io.StringIO("/all\nquit\nhistory\n"), stdout)
    assert stdout.getvalue() == "[All pages]\nhttp://a.example\nhttp://b.example\n"


def test_bench_reports_generated_query_timings(engine) -> None:
    out = handle_command(engine, "bench infix 10")
    assert "Metrics Report: infix, 10 queries" in out
    assert "Latency Statistics (ms):" in out
    assert "queries/second" in out
    assert "Memory Usage:" in out
    assert "Rejected" not in out

    assert "prefix, 50 queries" in handle_command(engine, "bench")
    assert handle_command(engine, "bench sideways").startswith("Usage: bench")
    assert "bench" in handle_command(engine, "help")


def test_bench_on_empty_engine() -> None:
    from webindex import IndexingEngine
    assert handle_command(IndexingEngine(), "bench") == "Nothing indexed to benchmark"
