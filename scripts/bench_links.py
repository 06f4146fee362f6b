#!/usr/bin/env python3
"""Benchmark link suggestions: latency (p50, p95, p99) and QPS.

Usage:
  export API_URL=http://localhost:8000
  python scripts/bench_links.py [--num-notes 100] [--num-queries 50] [--wait 30]

Seeds notes through the API, waits for background enrichment, then times
GET /v1/notes/{id}/links over random notes.
"""
from __future__ import annotations

import argparse
import os
import random
import statistics
import sys
import time

import httpx

TOPICS = [
    "postgres indexing and query planning",
    "python asyncio task groups and cancellation",
    "kubernetes deployments and rolling updates",
    "vector embeddings and cosine similarity",
    "note taking and zettelkasten linking",
]


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark link suggestions")
    parser.add_argument("--num-notes", type=int, default=50, help="Notes to create before querying")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of link requests")
    parser.add_argument("--wait", type=float, default=30.0, help="Seconds to wait for enrichment")
    parser.add_argument("--output", type=str, default="/results/bench_links.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    note_ids: list[str] = []

    with httpx.Client(timeout=60.0) as client:
        print(f"Seeding {args.num_notes} notes...")
        for i in range(args.num_notes):
            topic = TOPICS[i % len(TOPICS)]
            r = client.post(
                f"{api_url}/v1/notes",
                json={
                    "title": f"Bench note {i}: {topic}",
                    "content": f"Notes about {topic}. Entry {i} for link benchmark.",
                },
            )
            r.raise_for_status()
            note_ids.append(r.json()["id"])

    print(f"Waiting {args.wait:.0f}s for enrichment...")
    time.sleep(args.wait)

    latencies: list[float] = []
    errors = 0
    print(f"Running {args.num_queries} link requests...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=60.0) as client:
        for _ in range(args.num_queries):
            note_id = random.choice(note_ids)
            t0 = time.perf_counter()
            r = client.get(f"{api_url}/v1/notes/{note_id}/links", params={"min": 0.5, "topk": 3})
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful link requests.")
        return 1

    qps = n / total_elapsed
    p50 = statistics.median(latencies) * 1000
    p95 = sorted(latencies)[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = sorted(latencies)[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Links benchmark (notes={args.num_notes}, queries={n}, errors={errors})\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError as e:
        print(f"Could not write {args.output}: {e}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
