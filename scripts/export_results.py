"""Export XSMB results for a range of dates as JSON lines.

Each line is one result in the API's camelCase shape. Dates whose lookup
failed are written as the all-"..." record unless --skip-empty is given.

Usage:
  python scripts/export_results.py --start 2024-11-01 --end 2024-11-07 -o results.jsonl
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
from tqdm import tqdm

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from xsmb.clients.gemini import GeminiClient
from xsmb.config import resolve_gemini_api_key
from xsmb.schemas.lottery_result import LotteryResultSchema
from xsmb.services.clock import TimeService
from xsmb.services.lookup import GeminiResultLookup
from xsmb.services.result_pipeline import ResultPipeline
from xsmb.utils.dates import parse_date, shift_date

logger = logging.getLogger(__name__)


def date_range(start: str, end: str) -> list[str]:
    """Inclusive, oldest first."""

    if parse_date(end) < parse_date(start):
        raise ValueError(f"--end {end} is before --start {start}")
    out = [start]
    while out[-1] != end:
        out.append(shift_date(out[-1], 1))
    return out


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export XSMB results for a date range as JSON lines")
    parser.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Last date (default: latest completed draw)")
    parser.add_argument("-o", "--output", type=pathlib.Path, default=None, help="Output file (default: stdout)")
    parser.add_argument("--model", default="gemini-2.5-flash")
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=60.0)
    parser.add_argument("--attempts", type=int, default=3)
    parser.add_argument("--delay", type=float, default=1.5, help="Seconds between failed attempts")
    parser.add_argument("--skip-empty", action="store_true", help="Do not write dates without results")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    load_dotenv()

    clock = TimeService()
    end = args.end or clock.default_date_string()
    dates = date_range(args.start, end)

    client = GeminiClient(resolve_gemini_api_key(), args.model, timeout_seconds=args.timeout_seconds)
    pipeline = ResultPipeline(
        GeminiResultLookup(client),
        clock,
        max_attempts=args.attempts,
        retry_delay=args.delay,
    )
    schema = LotteryResultSchema()

    out = args.output.open("w", encoding="utf-8") if args.output else sys.stdout
    written = 0
    try:
        for date in tqdm(dates, desc="Fetching results", unit="day"):
            result = pipeline.fetch_result(date)
            if args.skip_empty and not result.has_data:
                logger.info("No result for %s, skipped", date)
                continue
            out.write(json.dumps(schema.dump(result), ensure_ascii=False) + "\n")
            written += 1
    finally:
        if out is not sys.stdout:
            out.close()

    logger.info("Wrote %d of %d dates", written, len(dates))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
