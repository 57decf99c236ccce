import argparse
import json
import sys
from pathlib import Path
from typing import Any

import httpx


def _print_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=True))
    sys.stdout.write("\n")


def health(base_url: str) -> int:
    try:
        resp = httpx.get(f"{base_url}/health", timeout=5)
        resp.raise_for_status()
        _print_json(resp.json())
        return 0
    except Exception as exc:
        _print_json({"status": "error", "error": str(exc)})
        return 1


def _post(base_url: str, path: str, payload: dict) -> int:
    try:
        resp = httpx.post(f"{base_url}{path}", json=payload, timeout=30)
        resp.raise_for_status()
        _print_json(resp.json())
        return 0
    except Exception as exc:
        _print_json({"status": "error", "error": str(exc)})
        return 1


def _read_hostnames(args: argparse.Namespace) -> list[str]:
    hostnames = list(args.hostnames)
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
        hostnames.extend(line.strip() for line in text.splitlines() if line.strip())
    return hostnames


def main() -> None:
    parser = argparse.ArgumentParser(prog="panelctl")
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:7600",
        help="Base URL for the originpanel service",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("health", help="Check service health")
    sort_parser = subparsers.add_parser("sort", help="Order hostnames for display")
    sort_parser.add_argument("hostnames", nargs="*", help="Hostnames to order")
    sort_parser.add_argument("--file", help="File with one hostname per line")
    panel_parser = subparsers.add_parser("panel", help="Build popup rows for origins")
    panel_parser.add_argument("--file", help="Path to JSON request body")
    panel_parser.add_argument("--json", help="Inline JSON request body")

    args = parser.parse_args()

    if args.command == "health":
        raise SystemExit(health(args.base_url))
    if args.command == "sort":
        try:
            hostnames = _read_hostnames(args)
        except OSError as exc:
            _print_json({"status": "error", "error": str(exc)})
            raise SystemExit(1)
        raise SystemExit(
            _post(args.base_url, "/v1/sort_domains", {"hostnames": hostnames})
        )
    if args.command == "panel":
        if not args.file and not args.json:
            _print_json({"status": "error", "error": "Provide --file or --json"})
            raise SystemExit(1)
        try:
            if args.file:
                payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
            else:
                payload = json.loads(args.json)
        except Exception as exc:
            _print_json({"status": "error", "error": f"Invalid JSON: {exc}"})
            raise SystemExit(1)
        raise SystemExit(_post(args.base_url, "/v1/panel", payload))


if __name__ == "__main__":
    main()
