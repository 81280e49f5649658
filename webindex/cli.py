"""
Interactive command shell over an IndexingEngine
Stands in for the browser's query pane: open pages, run queries, inspect documents
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import configure_logging, settings
from .core import DocumentNotFoundError, QuerySyntax, QuerySyntaxError, UrlUtils
from .engine import IndexingEngine
from .index_builder import IndexBuilder, TestQueryGenerator
from .metrics import MetricsCollector, Reporter
from .query_processor import ListingResult


HELP = """Commands:
  open <path | file: URL>   index a saved HTML page
  prefix <query>            run a prefix query, e.g. and(apple,or(pear,plum))
  infix <query>             run an infix query, e.g. apple AND pear OR plum
  /all                      list every indexed page
  show <url>                words in head and body of a page
  history                   pages in the order they were first visited
  stats                     index sizes
  bench [prefix|infix] [N]  time N generated queries (default prefix, 50)
  help                      this text
  quit                      leave
Any other line is a query in the default syntax."""


def format_result(result) -> str:
    if result is None:
        return "(no results yet)"
    if isinstance(result, ListingResult):
        return '\n'.join(["[All pages]"] + (result.urls or ["(none)"]))
    return '\n'.join(
        ["[Head matches]"] + (result.head_urls or ["(none)"]) +
        ["", "[Body matches]"] + (result.body_urls or ["(none)"])
    )


def open_location(engine: IndexingEngine, location: str) -> str:
    if UrlUtils.is_local_file(location) or Path(location).exists():
        try:
            doc = engine.load_local_file(location)
        except OSError as e:
            return f"Cannot read {location}: {e}"
        return f"Indexed {doc.url}"
    return f"Not a local file: {UrlUtils.complete_url(location)} (pages are fetched by the browser)"


def run_benchmark(engine: IndexingEngine, argument: str) -> str:
    """Time generated queries against the body index vocabulary"""
    syntax = QuerySyntax.PREFIX
    num_queries = 50
    for part in argument.split():
        if part.lower() in ('prefix', 'infix'):
            syntax = QuerySyntax(part.lower())
        elif part.isdigit() and int(part) > 0:
            num_queries = int(part)
        else:
            return "Usage: bench [prefix|infix] [N]"

    queries = TestQueryGenerator.generate_queries(engine.body_index, num_queries, syntax)
    if not queries:
        return "Nothing indexed to benchmark"

    metrics = {
        'latency': MetricsCollector.measure_query_latency(engine, queries, syntax),
        'throughput': MetricsCollector.measure_throughput(engine, queries, syntax),
        'memory': MetricsCollector.measure_memory(),
    }
    return Reporter.format_metrics_report(f"{syntax.value}, {len(queries)} queries", metrics)


def handle_command(engine: IndexingEngine, line: str,
                   default_syntax: QuerySyntax = QuerySyntax.PREFIX) -> Optional[str]:
    """Run one shell line and return the text to show, or None to quit"""
    line = line.strip()
    if not line:
        return ''

    command, _, argument = line.partition(' ')
    command = command.lower()
    argument = argument.strip()

    if command in ('quit', 'exit'):
        return None
    if command == 'help':
        return HELP
    if command == 'history':
        return '\n'.join(engine.history()) or "(no pages visited)"
    if command == 'bench':
        return run_benchmark(engine, argument)
    if command == 'stats':
        return Reporter.format_index_stats(engine)
    if command == 'open':
        return open_location(engine, argument) if argument else "Usage: open <path>"
    if command == 'show':
        try:
            return engine.document_summary(argument)
        except DocumentNotFoundError as e:
            return str(e)

    syntax = default_syntax
    query = line
    if command in ('prefix', 'infix'):
        syntax = QuerySyntax(command)
        query = argument

    try:
        result = engine.search(query, syntax)
    except QuerySyntaxError as e:
        return f"Syntax error: {e}\n\n" + format_result(engine.last_result)
    return format_result(result)


def repl(engine: IndexingEngine, default_syntax: QuerySyntax, stdin=sys.stdin, stdout=sys.stdout):
    for line in stdin:
        output = handle_command(engine, line, default_syntax)
        if output is None:
            break
        if output:
            print(output, file=stdout)


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Query the pages you have visited")
    parser.add_argument('--syntax', choices=[s.value for s in QuerySyntax],
                        default=settings.default_syntax.value,
                        help="syntax of lines without a command")
    parser.add_argument('--load', action='append', default=[], metavar='PATH',
                        help="HTML file, directory or zip to index at startup")
    args = parser.parse_args(argv)

    configure_logging(settings)

    engine = IndexingEngine(html_encoding=settings.html_encoding)
    builder = IndexBuilder(engine)
    for path in args.load:
        builder.build_from_path(path)

    print(HELP)
    repl(engine, QuerySyntax(args.syntax))


if __name__ == "__main__":
    main()
