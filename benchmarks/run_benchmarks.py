#!/usr/bin/env python3
"""Benchmark suite measuring empirical vs. estimated false-positive rates."""

import argparse
import json
import logging
import os
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pybloomset import BloomFilter, seeded_source

logger = logging.getLogger("benchmarks")


class Metrics:
    def __init__(self):
        self.bits_per_element: List[int] = []
        self.estimated: List[float] = []
        self.empirical: List[float] = []
        self.add_latencies: List[float] = []
        self.lookup_latencies: List[float] = []

    def to_dict(self) -> Dict:
        return {
            "bits_per_element": self.bits_per_element,
            "estimated_fp": self.estimated,
            "empirical_fp": self.empirical,
            "add_latency_us": {
                "p50": float(np.percentile(self.add_latencies, 50)),
                "p95": float(np.percentile(self.add_latencies, 95)),
                "p99": float(np.percentile(self.add_latencies, 99)),
            },
            "lookup_latency_us": {
                "p50": float(np.percentile(self.lookup_latencies, 50)),
                "p95": float(np.percentile(self.lookup_latencies, 95)),
                "p99": float(np.percentile(self.lookup_latencies, 99)),
            },
        }

    def plot_rates(self, title: str, output_path: Path):
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=self.bits_per_element, y=self.estimated, name="Estimated", mode="lines+markers"))
        fig.add_trace(go.Scatter(x=self.bits_per_element, y=self.empirical, name="Empirical", mode="lines+markers"))
        fig.update_layout(
            title=title,
            xaxis_title="Bits per element (m / n)",
            yaxis_title="False-positive rate",
            yaxis_type="log",
        )
        fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, num_probes: int, key_size: int, seed: int):
        self.num_entries = num_entries
        self.num_probes = num_probes
        self.seed = seed
        self.metrics = Metrics()
        # members and probes are disjoint by prefix
        self._members = [b"m" + os.urandom(key_size) for _ in range(num_entries)]
        self._probes = [b"p" + os.urandom(key_size) for _ in range(num_probes)]

    def run_ratio(self, bits_per_element: int):
        bf = BloomFilter(bits_per_element * self.num_entries, self.num_entries, seed_source=seeded_source(self.seed))

        for key in tqdm(self._members, desc=f"add m/n={bits_per_element}", leave=False):
            start = time.perf_counter()
            bf.add(key)
            self.metrics.add_latencies.append((time.perf_counter() - start) * 1e6)

        hits = 0
        for key in tqdm(self._probes, desc=f"probe m/n={bits_per_element}", leave=False):
            start = time.perf_counter()
            hits += bf.contains(key)
            self.metrics.lookup_latencies.append((time.perf_counter() - start) * 1e6)

        empirical = hits / self.num_probes
        estimated = bf.false_positive_probability()
        logger.info("m/n=%d k=%d estimated=%.6f empirical=%.6f", bits_per_element, bf.num_hash_functions, estimated, empirical)
        self.metrics.bits_per_element.append(bits_per_element)
        self.metrics.estimated.append(estimated)
        self.metrics.empirical.append(empirical)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=10000, help="Number of inserted elements")
    parser.add_argument("--probes", type=int, default=100000, help="Number of non-member lookups")
    parser.add_argument("--key-size", type=int, default=16, help="Size of random keys in bytes")
    parser.add_argument("--max-ratio", type=int, default=16, help="Largest bits-per-element ratio to test")
    parser.add_argument("--seed", type=int, default=0, help="Seed for reproducible hash seeds")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.probes, args.key_size, args.seed)
    for ratio in range(1, args.max_ratio + 1):
        suite.run_ratio(ratio)

    suite.metrics.plot_rates("Bloom filter false-positive rate", args.output / "false_positive_rates.html")
    with open(args.output / "metrics.json", "w") as f:
        json.dump(suite.metrics.to_dict(), f, indent=2)


if __name__ == "__main__":
    main()
