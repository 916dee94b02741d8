#!/usr/bin/env python3
# healthcheck.py
"""
Liveness probe for the static server, meant for container HEALTHCHECK lines.

Usage:
  python healthcheck.py
  python healthcheck.py --url http://127.0.0.1:3000/health --timeout 2
"""
import os, sys, argparse
import requests
from schemas import HEALTH_PAYLOAD

def default_url() -> str:
    if os.environ.get("HEALTH_URL"):
        return os.environ["HEALTH_URL"]
    return f"http://127.0.0.1:{os.environ.get('PORT', '3000')}/health"

def check(url: str, timeout: float) -> str:
    """Return an empty string when healthy, otherwise the reason it is not."""
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        return f"request failed: {e}"
    if r.status_code != 200:
        return f"status {r.status_code}"
    try:
        body = r.json()
    except ValueError:
        return "body is not JSON"
    if body != HEALTH_PAYLOAD:
        return f"unexpected body {body}"
    return ""

def main(argv=None):
    ap = argparse.ArgumentParser(description="Probe the /health endpoint")
    ap.add_argument("--url", default=default_url(), help="health endpoint (env HEALTH_URL)")
    ap.add_argument("--timeout", type=float, default=3.0, help="seconds")
    args = ap.parse_args(argv)

    reason = check(args.url, args.timeout)
    if reason:
        print(f"UNHEALTHY {args.url}: {reason}", file=sys.stderr)
        sys.exit(1)
    print("OK", args.url)

if __name__ == "__main__":
    main()
