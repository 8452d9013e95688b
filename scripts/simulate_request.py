# scripts/simulate_request.py
from __future__ import annotations

import argparse
import logging
import sys

from propfeed.config import settings
from propfeed.errors import DecodeError
from propfeed.schemas import RequestConfig
from propfeed.service_layer.harness import run_request_sync
from propfeed.service_layer.use_cases.encode_property import decode_property_payload


def _quiet_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    # httpx logs full request URLs, token included
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # diagnostics are printed from the captured output instead
    logging.getLogger("propfeed").propagate = False


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not f > 0:
        raise argparse.ArgumentTypeError(f"must be > 0: {value!r}")
    return f


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Fetch a RESO property and print its ABI-encoded payload.")
    ap.add_argument("--url", default=None, help="full request URL (overrides RESO_* settings)")
    ap.add_argument("--listing-key", default=None, help="Property('<key>') to fetch")
    ap.add_argument("--timeout", type=_positive_float, default=None, help="HTTP timeout in seconds")
    ap.add_argument("--decode", metavar="HEX", default=None, help="decode a payload instead of fetching")
    ap.add_argument("args", nargs="*", help="request args (args[0] is used as listing key)")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    ns = _parse_args(argv)

    if ns.decode:
        try:
            facts = decode_property_payload(ns.decode)
        except DecodeError as e:
            print(f"DecodeError: {e}")
            return 1
        print(facts.as_tuple())
        return 0

    config = RequestConfig.from_settings(
        url=ns.url,
        listing_key=ns.listing_key,
        timeout_s=ns.timeout,
        args=ns.args or None,
    )
    result = run_request_sync(config)

    print(result.response_bytes_hexstring)
    print(result.error_string)
    print(result.captured_terminal_output)

    return 0 if result.ok else 1


if __name__ == "__main__":
    _quiet_logging()
    sys.exit(main())
