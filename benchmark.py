#!/usr/bin/env python3
"""
Performance benchmarking script for the Rwanda location index.

This script measures the cost of each stage of serving location queries:
- Dataset loading and record building
- Index construction (projections, name maps, statistics)
- Listings, lookups, queries and free-text search
- Full-path reconstruction for every village
- Scalability of index construction with replicated datasets
"""

import sys
import time
import psutil
import gc
import argparse
import json
from dataclasses import replace
from pathlib import Path
from datetime import datetime
from typing import List, Optional

import numpy as np

from rwanda_locations.config import IndexConfig, DEFAULT_DATA_FILE
from rwanda_locations.data_loader import DataLoader
from rwanda_locations.location_index import LocationIndex
from rwanda_locations.logging_config import setup_logging
from rwanda_locations.models import LocationRecord


class BenchmarkResult:
    """Container for benchmark results."""

    def __init__(self, name: str):
        self.name = name
        self.duration = 0.0
        self.memory_start = 0.0
        self.memory_end = 0.0
        self.operations = 0
        self.success = False
        self.error = None
        self.metrics = {}

    @property
    def operations_per_second(self) -> float:
        return self.operations / self.duration if self.duration > 0 else 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'duration_seconds': self.duration,
            'memory_start_mb': self.memory_start,
            'memory_end_mb': self.memory_end,
            'memory_growth_mb': self.memory_end - self.memory_start,
            'operations': self.operations,
            'operations_per_second': self.operations_per_second,
            'success': self.success,
            'error': str(self.error) if self.error else None,
            'metrics': self.metrics
        }


def replicate_records(records: List[LocationRecord], copies: int) -> List[LocationRecord]:
    """
    Grow a dataset by repeating it with shifted codes.

    Every copy gets its own village, cell and district codes so the replicated
    dataset has the same shape as a larger real one.
    """
    replicated = []
    for copy in range(copies):
        for record in records:
            replicated.append(replace(
                record,
                id=f"{copy}-{record.id}",
                district_code=record.district_code + copy * 1000,
                sector_code=f"{copy:03d}{record.sector_code}",
                cell_code=record.cell_code + copy * 10_000_000,
                village_code=record.village_code + copy * 1_000_000_000,
            ))
    return replicated


class PerformanceBenchmark:
    """Runs and reports location index benchmarks."""

    def __init__(self, data_file: str, output_dir: str = "benchmark_results"):
        self.config = IndexConfig(data_file=data_file, log_level="WARNING")
        self.logger = setup_logging(self.config)
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(exist_ok=True)
        self.process = psutil.Process()
        self.results: List[BenchmarkResult] = []
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self._records: Optional[List[LocationRecord]] = None
        self._index: Optional[LocationIndex] = None

    def get_memory_usage(self) -> float:
        """Get current memory usage in MB."""
        return self.process.memory_info().rss / 1024 / 1024

    @property
    def records(self) -> List[LocationRecord]:
        if self._records is None:
            loader = DataLoader(logger=self.logger.logger)
            self._records = loader.load_records(self.config.data_file)
        return self._records

    @property
    def index(self) -> LocationIndex:
        if self._index is None:
            self._index = LocationIndex(self.records, logger=self.logger.logger)
        return self._index

    def run_benchmark(self, name: str, func, *args, **kwargs) -> BenchmarkResult:
        """Run a single benchmark and record its duration and memory growth."""
        result = BenchmarkResult(name)

        print(f"\n{'='*60}")
        print(f"Running benchmark: {name}")
        print(f"{'='*60}")

        gc.collect()
        result.memory_start = self.get_memory_usage()
        start_time = time.time()

        try:
            metrics = func(*args, **kwargs)
            result.duration = time.time() - start_time
            result.memory_end = self.get_memory_usage()
            result.success = True
            result.metrics = metrics
            result.operations = metrics.get('operations', 0)

            print(f"✓ Completed in {result.duration:.3f}s")
            print(f"  Memory: {result.memory_start:.1f} MB → {result.memory_end:.1f} MB "
                  f"(+{result.memory_end - result.memory_start:.1f} MB)")
            if result.operations:
                print(f"  Rate: {result.operations_per_second:,.0f} operations/second")

        except Exception as e:
            result.duration = time.time() - start_time
            result.memory_end = self.get_memory_usage()
            result.error = e
            self.logger.error(f"Benchmark '{name}' failed: {e}")
            print(f"✗ Failed: {e}")

        self.results.append(result)
        return result

    def benchmark_data_loading(self) -> dict:
        loader = DataLoader(logger=self.logger.logger)
        records = loader.load_records(self.config.data_file)
        return {'operations': len(records), 'records_loaded': len(records)}

    def benchmark_index_build(self) -> dict:
        index = LocationIndex(self.records, logger=self.logger.logger)
        return {'operations': len(index), **index.get_statistics().to_dict()}

    def benchmark_listings(self) -> dict:
        """Walk the whole hierarchy through filtered listings."""
        index = self.index
        calls = 0
        for province in index.list_provinces():
            for district in index.list_districts(province_code=province.code):
                calls += 1
                for sector in index.list_sectors(district_code=district.code):
                    calls += 1
                    for cell in index.list_cells(sector_code=sector.code):
                        index.list_villages(cell_code=cell.code)
                        calls += 2
        return {'operations': calls, 'listing_calls': calls}

    def benchmark_lookups(self) -> dict:
        """Code lookups and full paths for every village."""
        index = self.index
        villages = index.list_villages()
        for village in villages:
            index.get_village_by_code(village.code)
            index.get_full_path(village.code)
        return {'operations': len(villages) * 2, 'villages': len(villages)}

    def benchmark_queries(self, repeat: int = 20) -> dict:
        index = self.index
        provinces = index.list_provinces()
        calls = 0
        for _ in range(repeat):
            for province in provinces:
                index.query(province_name=province.name)
                index.query(province_code=province.code, village_name=province.name)
                calls += 2
        return {'operations': calls, 'query_calls': calls}

    def benchmark_search(self, terms: Optional[List[str]] = None, repeat: int = 20) -> dict:
        index = self.index
        terms = terms or ['ga', 'Kigali', 'nya', 'zzz']
        matches = 0
        for _ in range(repeat):
            for term in terms:
                matches += len(index.search(term))
                index.search(term, case_sensitive=True, limit=10)
        return {
            'operations': repeat * len(terms) * 2,
            'average_matches': matches / (repeat * len(terms))
        }

    def benchmark_scalability(self, copies: List[int]) -> dict:
        """Index construction time as the dataset grows."""
        scalability_results = []

        for count in copies:
            records = replicate_records(self.records, count)
            start = time.time()
            LocationIndex(records, logger=self.logger.logger)
            duration = time.time() - start

            scalability_results.append({
                'records': len(records),
                'duration': duration,
                'rate': len(records) / duration if duration > 0 else 0
            })
            print(f"  {len(records):,} records: {duration:.3f}s")

        return {
            'operations': sum(r['records'] for r in scalability_results),
            'scalability_data': scalability_results
        }

    def generate_report(self) -> str:
        """Generate a plain-text benchmark report."""
        lines = [
            "=" * 80,
            "RWANDA LOCATION INDEX BENCHMARK REPORT",
            "=" * 80,
            f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Dataset: {self.config.data_file} ({len(self.records):,} records)",
            f"System: {psutil.cpu_count()} CPUs, {psutil.virtual_memory().total / 1024**3:.1f} GB RAM",
            "",
        ]

        successful = [r for r in self.results if r.success]
        lines.append(f"Benchmarks: {len(self.results)} run, {len(successful)} successful")
        lines.append("-" * 80)

        for result in self.results:
            lines.append(f"\n{result.name}: {'✓ Success' if result.success else '✗ Failed'}")

            if not result.success:
                lines.append(f"  Error: {result.error}")
                continue

            lines.append(f"  Duration: {result.duration:.3f} seconds")
            lines.append(f"  Memory growth: {result.memory_end - result.memory_start:+.1f} MB")
            if result.operations:
                lines.append(f"  Rate: {result.operations_per_second:,.0f} operations/second")
            for key, value in result.metrics.items():
                if key == 'operations' or key.endswith('_data'):
                    continue
                lines.append(f"  {key}: {value:.2f}" if isinstance(value, float) else f"  {key}: {value}")

        if successful:
            lines.append("\n" + "=" * 80)
            lines.append(f"Total time: {sum(r.duration for r in successful):.2f} seconds")
            lines.append(
                f"Average memory growth: "
                f"{np.mean([r.memory_end - r.memory_start for r in successful]):.1f} MB"
            )

        lines.append("=" * 80)
        return "\n".join(lines)

    def save_results(self):
        """Save benchmark results as JSON and as a text report."""
        json_file = self.output_dir / f"benchmark_results_{self.timestamp}.json"
        results_data = {
            'timestamp': self.timestamp,
            'data_file': self.config.data_file,
            'system_info': {
                'cpu_count': psutil.cpu_count(),
                'total_memory_gb': psutil.virtual_memory().total / 1024**3,
                'python_version': sys.version
            },
            'benchmarks': [r.to_dict() for r in self.results]
        }

        with open(json_file, 'w') as f:
            json.dump(results_data, f, indent=2)

        report_file = self.output_dir / f"benchmark_report_{self.timestamp}.txt"
        with open(report_file, 'w', encoding='utf-8') as f:
            f.write(self.generate_report())

        print(f"\n✓ JSON results saved to: {json_file}")
        print(f"✓ Text report saved to: {report_file}")
        return json_file, report_file


def main(argv: Optional[List[str]] = None) -> int:
    """Main benchmark execution function."""
    parser = argparse.ArgumentParser(description="Rwanda Location Index Benchmark")
    parser.add_argument("--data", default=DEFAULT_DATA_FILE,
                        help="Path to the locations JSON or CSV file (default: bundled dataset)")
    parser.add_argument("--output", default="benchmark_results", help="Output directory for results")
    parser.add_argument("--quick", action="store_true", help="Skip the query and search benchmarks")
    parser.add_argument("--scalability", action="store_true",
                        help="Include index construction on replicated datasets")
    parser.add_argument("--copies", type=int, nargs="+", default=[10, 100, 500],
                        help="Dataset replication factors for --scalability")

    args = parser.parse_args(argv)

    if not Path(args.data).exists():
        print(f"Error: Data file not found: {args.data}", file=sys.stderr)
        return 1

    print("=" * 80)
    print("RWANDA LOCATION INDEX BENCHMARK")
    print("=" * 80)
    print(f"Data file: {args.data}")
    print(f"Mode: {'Quick' if args.quick else 'Comprehensive'}")

    benchmark = PerformanceBenchmark(args.data, args.output)

    benchmark.run_benchmark("Data Loading", benchmark.benchmark_data_loading)
    benchmark.run_benchmark("Index Build", benchmark.benchmark_index_build)
    benchmark.run_benchmark("Hierarchy Listings", benchmark.benchmark_listings)
    benchmark.run_benchmark("Lookups and Full Paths", benchmark.benchmark_lookups)

    if not args.quick:
        benchmark.run_benchmark("Queries", benchmark.benchmark_queries)
        benchmark.run_benchmark("Search", benchmark.benchmark_search)

    if args.scalability:
        benchmark.run_benchmark("Scalability", benchmark.benchmark_scalability, args.copies)

    print("\n" + benchmark.generate_report())
    benchmark.save_results()

    successful = sum(1 for r in benchmark.results if r.success)
    print(f"\nBenchmark Complete: {successful}/{len(benchmark.results)} benchmarks passed")

    return 0 if successful == len(benchmark.results) else 1


if __name__ == "__main__":
    sys.exit(main())
