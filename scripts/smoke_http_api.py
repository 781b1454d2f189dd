"""
Manual smoke runner for the sheet ledger Django adapter endpoints.

Start the server with the demo yard loaded first:
    SHEETLEDGER_SEED_DEMO_DATA=1 python manage.py runserver

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, parse, request


DEMO_CUSTOMER = "ABC Corp"


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
) -> tuple[int, dict]:
    encoded = None
    req_headers = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            status = response.status
            payload = json.loads(response.read().decode("utf-8"))
            return status, payload
    except error.HTTPError as exc:
        payload = json.loads(exc.read().decode("utf-8"))
        return exc.code, payload


def _print_case(label: str, status: int, payload: dict) -> None:
    print(f"\n[{label}] status={status}")
    print(json.dumps(payload, indent=2, sort_keys=True))


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/v1/stock"
    customer = parse.quote(DEMO_CUSTOMER)

    status, payload = _call(method="GET", url=f"{api}/customers")
    _print_case("customer-summaries", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/customers/{customer}/items?active_only=false",
    )
    _print_case("item-stock-sheet", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/events",
        body={
            "action": "WASTAGE",
            "customer": DEMO_CUSTOMER,
            "item_code": "S-10mm",
            "item_type": "Steel 10mm",
            "quantity": 1000,
            "source_pool": "RAW",
        },
    )
    _print_case("wastage-insufficient-stock", status, payload)

    status, payload = _call(
        method="POST",
        url=f"{api}/events",
        body={
            "action": "PROCESS",
            "customer": DEMO_CUSTOMER,
            "item_code": "S-10mm",
            "item_type": "Steel 10mm",
            "quantity": 5,
            "processing_status": "CUTTING_COMPLETED",
            "metadata": {"details": "Smoke batch"},
        },
    )
    _print_case("process-success", status, payload)

    status, payload = _call(
        method="GET",
        url=f"{api}/customers/{customer}/history?order=CHRONOLOGICAL",
    )
    _print_case("customer-history", status, payload)

    status, payload = _call(method="GET", url=f"{api}/movements?range=ALL")
    _print_case("movement-stats", status, payload)

    status, payload = _call(method="GET", url=f"{api}/events")
    _print_case("method-not-allowed", status, payload)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
