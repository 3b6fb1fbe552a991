#!/usr/bin/env python3
"""
Convert a contractor price sheet (CSV) into a customPricing override.

Usage:
    python data/import_price_sheet.py "PRICING v4.1.csv"
    python data/import_price_sheet.py "PRICING v4.1.csv" --output data/custom_pricing.json
    python data/import_price_sheet.py "PRICING v4.1.csv" --store

Outputs:
  - JSON list of rate entries (default: data/custom_pricing.json)
  - with --store, the override is also saved into the configured database
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from paint_estimator.price_sheet import read_price_sheet  # noqa: E402
from paint_estimator.rate_overrides import CUSTOM_PRICING, OVERRIDE_ADAPTERS  # noqa: E402


def store_override(entries) -> None:
    """Save the entries as the customPricing override in the configured database."""
    from paint_estimator.database import Base, SessionLocal, engine
    from paint_estimator.rate_overrides import save_override
    from paint_estimator.storage import SqlKeyValueStore

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        save_override(SqlKeyValueStore(db), CUSTOM_PRICING,
                      [e.model_dump(mode="json") for e in entries])
    finally:
        db.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("sheet", type=Path, help="CSV export of the price sheet")
    parser.add_argument("--output", type=Path,
                        default=project_root / "data" / "custom_pricing.json")
    parser.add_argument("--store", action="store_true",
                        help="also save into the configured database")
    args = parser.parse_args(argv)

    if not args.sheet.exists():
        print(f"Price sheet not found: {args.sheet}")
        return 1

    print(f"Reading price sheet from: {args.sheet}")
    result = read_price_sheet(args.sheet)

    for skipped in result.skipped:
        print(f"  row {skipped.row_number} skipped: {skipped.reason}")

    if not result.entries:
        print("\nNo rate entries found.")
        return 1

    payload = json.loads(OVERRIDE_ADAPTERS[CUSTOM_PRICING].dump_json(result.entries))
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(payload, indent=2))
    print(f"Wrote {len(result.entries)} entries to {args.output}")

    if args.store:
        store_override(result.entries)
        print(f"Saved {CUSTOM_PRICING} override to the database")

    # --- Summary ---
    print("\n--- Summary ---")
    by_substrate = {}
    for entry in result.entries:
        by_substrate[entry.substrate_type.value] = by_substrate.get(entry.substrate_type.value, 0) + 1
    for substrate, count in sorted(by_substrate.items()):
        print(f"{substrate}: {count}")
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
