"""
Metrics collection and reporting module
Collects performance metrics for indexing and query processing
"""

import time
from typing import Dict, List

import numpy as np
import psutil

from .core import QuerySyntax, QuerySyntaxError


class MetricsCollector:
    """Collect and analyze engine metrics"""

    @staticmethod
    def measure_memory() -> float:
        """Get current process memory usage in MB"""
        process = psutil.Process()
        return process.memory_info().rss / 1024 / 1024

    @staticmethod
    def measure_query_latency(engine,
                              queries: List[str],
                              syntax: QuerySyntax = QuerySyntax.PREFIX,
                              repetitions: int = 1) -> Dict:
        """
        Measure query latency statistics (averaged over multiple repetitions)
        Returns dict with averaged mean, p95, p99 latencies in milliseconds,
        plus the number of queries rejected as malformed
        """
        if not queries:
            return {}

        all_results = []
        errors = 0

        for _ in range(repetitions):
            latencies = []
            for query in queries:
                start_time = time.perf_counter()
                try:
                    engine.query_processor.process_boolean_query(query, syntax)
                except QuerySyntaxError:
                    errors += 1
                latency = (time.perf_counter() - start_time) * 1000  # Convert to ms
                latencies.append(latency)

            stats = {
                'mean': np.mean(latencies),
                'median': np.median(latencies),
                'p95': np.percentile(latencies, 95),
                'p99': np.percentile(latencies, 99),
                'min': min(latencies),
                'max': max(latencies),
                'std': np.std(latencies)
            }
            all_results.append(stats)

        # Average across repetitions
        averaged = {k: float(np.mean([res[k] for res in all_results])) for k in all_results[0]}
        averaged['errors'] = errors // repetitions
        return averaged

    @staticmethod
    def measure_throughput(engine,
                           queries: List[str],
                           syntax: QuerySyntax = QuerySyntax.PREFIX,
                           repetitions: int = 1) -> float:
        """
        Measure query throughput (queries per second) over all repetitions.
        """
        if not queries:
            return 0.0

        query_count = 0
        start_time = time.perf_counter()

        for _ in range(repetitions):
            for query in queries:
                try:
                    engine.query_processor.process_boolean_query(query, syntax)
                except QuerySyntaxError:
                    pass
                query_count += 1

        total_elapsed = time.perf_counter() - start_time
        return query_count / total_elapsed if total_elapsed > 0 else 0.0


class Reporter:
    """Format reports as text"""

    @staticmethod
    def format_metrics_report(name: str, metrics: Dict) -> str:
        """Formatted metrics report"""
        lines = ['=' * 70, f"Metrics Report: {name}", '=' * 70]

        if metrics.get('latency'):
            latency = metrics['latency']
            lines.append("Latency Statistics (ms):")
            lines.append(f"  Mean:     {latency['mean']:.2f}")
            lines.append(f"  Median:   {latency['median']:.2f}")
            lines.append(f"  P95:      {latency['p95']:.2f}")
            lines.append(f"  P99:      {latency['p99']:.2f}")
            if latency.get('errors'):
                lines.append(f"  Rejected: {latency['errors']}")

        if 'throughput' in metrics:
            lines.append(f"Throughput: {metrics['throughput']:.2f} queries/second")

        if 'memory' in metrics:
            lines.append(f"Memory Usage: {metrics['memory']:.2f} MB")

        lines.append('=' * 70)
        return '\n'.join(lines)

    @staticmethod
    def format_index_stats(engine) -> str:
        stats = engine.stats()
        return (f"Documents:       {stats['documents']}\n"
                f"Head vocabulary: {stats['head_terms']}\n"
                f"Body vocabulary: {stats['body_terms']}")
