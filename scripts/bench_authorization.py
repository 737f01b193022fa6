#!/usr/bin/env python3
"""Benchmark permission lookups: latency (p50, p95, p99) and QPS.

The first request for a user resolves from the store; later ones within the
cache TTL are served from memory, so the cold and warm numbers are reported
separately.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=... KEYCLOAK_CLIENT_SECRET=...
  uv run python scripts/bench_authorization.py [--num-requests 500]

  Without Keycloak (development verifier), pass the user id as the token:
  BENCH_TOKEN=<user-id> uv run python scripts/bench_authorization.py
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def percentiles(latencies: list[float]) -> tuple[float, float, float]:
    n = len(latencies)
    ordered = sorted(latencies)
    p50 = statistics.median(ordered) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95
    return p50, p95, p99


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark permission lookups")
    parser.add_argument("--num-requests", type=int, default=200, help="Warm requests to send")
    parser.add_argument("--user-id", type=str, default=None, help="User to look up (default: caller)")
    parser.add_argument("--output", type=str, default="/results/bench_authorization.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    token = os.environ.get("BENCH_TOKEN")
    if not token:
        print("Getting token...")
        token = get_token(
            os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
            os.environ.get("KEYCLOAK_REALM", "rolegate"),
            os.environ.get("KEYCLOAK_CLIENT_ID", "rolegate-api"),
            os.environ.get("KEYCLOAK_CLIENT_SECRET", ""),
            os.environ.get("BENCH_USER", "testuser"),
            os.environ.get("BENCH_PASSWORD", "testpass"),
        )
    headers = {"Authorization": f"Bearer {token}"}

    with httpx.Client(timeout=30.0) as client:
        user_id = args.user_id
        if not user_id:
            # the development verifier uses the token as the user id
            user_id = token if os.environ.get("BENCH_TOKEN") else os.environ.get("BENCH_USER_ID", "")
        if not user_id:
            print("Set --user-id or BENCH_USER_ID when authenticating through Keycloak.")
            return 1
        url = f"{api_url}/v1/users/{user_id}/permissions"

        t0 = time.perf_counter()
        r = client.get(url, headers=headers)
        cold = time.perf_counter() - t0
        if r.status_code != 200:
            print(f"Lookup failed: {r.status_code} {r.text}")
            return 1
        print(f"User {user_id} holds {len(r.json()['permissions'])} permissions")

        latencies: list[float] = []
        errors = 0
        print(f"Running {args.num_requests} lookups...")
        start_total = time.perf_counter()
        for _ in range(args.num_requests):
            t0 = time.perf_counter()
            r = client.get(url, headers=headers)
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
            else:
                errors += 1
        total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful lookups.")
        return 1

    p50, p95, p99 = percentiles(latencies)
    summary = (
        f"Permission lookup benchmark (requests={n}, errors={errors})\n"
        f"  Cold lookup: {cold * 1000:.1f} ms\n"
        f"  QPS: {n / total_elapsed:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
