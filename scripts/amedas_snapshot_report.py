#!/usr/bin/env python3
"""
AMeDAS Snapshot Coverage Report.

Fetches the latest snapshot (or the one given as YYYYMMDDHHmmss) and prints,
for every measurement kind, how many stations reported a quality-checked
value and the observed range against the catalog's display range.

Usage:
    python scripts/amedas_snapshot_report.py [YYYYMMDDHHmmss] [--csv out.csv]
"""

import asyncio
import sys
from datetime import datetime, timedelta, timezone

from amedasmap import (
    MEASUREMENT_CATALOG,
    MEASUREMENT_KINDS,
    encode,
    fetch_stations,
    to_dataframe,
)

JST = timezone(timedelta(hours=9))


def summarize(records):
    """Per-kind coverage and range over one set of station records."""
    summary = {}
    for kind in MEASUREMENT_KINDS:
        setting = MEASUREMENT_CATALOG[kind]
        points = encode(records, kind)
        values = [p.raw_value for p in points if p.raw_value is not None]
        out_of_range = [
            p for p in points
            if p.normalized_value is not None and not 0.0 <= p.normalized_value <= 1.0
        ]
        summary[kind] = {
            "name": setting.name,
            "unit": setting.display_unit,
            "reporting": len(values),
            "min": min(values) if values else None,
            "max": max(values) if values else None,
            "out_of_range": len(out_of_range),
        }
    return summary


async def main():
    """Run the snapshot report."""
    print(" AMeDAS Snapshot Coverage Report")
    print("=" * 50)

    args = sys.argv[1:]
    csv_path = None
    if "--csv" in args:
        index = args.index("--csv")
        if index + 1 >= len(args):
            print("Usage: python amedas_snapshot_report.py [YYYYMMDDHHmmss] [--csv out.csv]")
            sys.exit(1)
        csv_path = args[index + 1]
        del args[index:index + 2]

    as_of = None
    if args:
        as_of = datetime.strptime(args[0], "%Y%m%d%H%M%S").replace(tzinfo=JST)

    result = await fetch_stations(as_of)

    if result.errors:
        print("\n Failed sources:")
        for source, error in result.errors.items():
            print(f"   {source}: {error}")

    if not result.records:
        print("\n No station records available.")
        sys.exit(1)

    print(f"\n Snapshot: {result.timestamp.isoformat() if result.timestamp else 'unknown'}")
    print(f" Stations: {len(result)}")
    print()

    for kind, row in summarize(result.records).items():
        if row["reporting"]:
            observed = f"{row['min']:g} .. {row['max']:g} {row['unit']}"
        else:
            observed = "no data"
        print(
            f"   {kind:<17} {row['reporting']:>5} stations  {observed:<24}"
            f" outside display range: {row['out_of_range']}"
        )

    if csv_path:
        to_dataframe(result.records).to_csv(csv_path, index=False)
        print(f"\n Station records written to {csv_path}")


if __name__ == "__main__":
    asyncio.run(main())
