"""
Command Line Interface

Entry point for running a business search from the command line.

Usage:
    python -m osm_finder "Jakarta"
    python -m osm_finder "Bandung, Indonesia" --radius 2000 -c restaurant -c cafe
    python -m osm_finder "Berl" --suggest
"""

import argparse
import json
import logging
import os
import sys

from .config import DEFAULT_RADIUS_METERS, MAX_RADIUS_METERS, MIN_RADIUS_METERS, OUTPUT_DIR
from .exceptions import FinderError
from .export import export_filename
from .extraction.query import FILTER_CLAUSES, CategoryFilter
from .finder import BusinessFinder


def _category_help() -> str:
    names = []
    for f in CategoryFilter:
        names.append(f.value if f in FILTER_CLAUSES else f"{f.value} (no clause, ignored)")
    return ", ".join(names)


def print_table(result, limit: int = 20):
    """Print the first rows of a result as a numbered table."""
    rows = result.businesses[:limit]
    if not rows:
        print("\nNo named businesses found in range.")
        return

    print(f"\n{'No':>4}  {'Name':<32} {'Type':<16} {'Phone':<16} Address")
    print("-" * 100)
    for index, biz in enumerate(rows):
        print(f"{index + 1:>4}  {biz.name[:32]:<32} {biz.type[:16]:<16} "
              f"{biz.phone[:16]:<16} {biz.address}")
    if len(result) > limit:
        print(f"  ... and {len(result) - limit} more")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="OpenStreetMap Business Finder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m osm_finder "Jakarta"
  python -m osm_finder "Bandung, Indonesia" --radius 2000 -c restaurant -c cafe
  python -m osm_finder "Surabaya" --csv surabaya.csv --json surabaya.json
  python -m osm_finder "Yogya" --suggest
        """
    )

    # Required arguments
    parser.add_argument(
        "place",
        help="Place to search around (e.g., 'Jakarta', 'Hermannstraße 100, Berlin')"
    )

    # Optional arguments
    parser.add_argument(
        "-r", "--radius",
        type=float,
        default=DEFAULT_RADIUS_METERS,
        help=f"Search radius in metres (default: {DEFAULT_RADIUS_METERS}, "
             f"typical: {MIN_RADIUS_METERS}-{MAX_RADIUS_METERS})"
    )
    parser.add_argument(
        "-c", "--category",
        action="append",
        default=[],
        metavar="NAME",
        help=f"Restrict to a category (repeatable). One of: {_category_help()}"
    )
    csv_group = parser.add_mutually_exclusive_group()
    csv_group.add_argument(
        "--csv",
        help="Output CSV file path (default: output/businesses_{place}_{date}.csv)"
    )
    csv_group.add_argument(
        "--no-csv",
        action="store_true",
        help="Disable CSV output"
    )
    parser.add_argument(
        "--json",
        help="Also write the full result as JSON to this path"
    )
    parser.add_argument(
        "--suggest",
        action="store_true",
        help="Print place suggestions for the given text and exit"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress output"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (includes the Overpass query)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    verbose = not args.quiet

    try:
        with BusinessFinder(verbose=verbose) as finder:
            if args.suggest:
                suggestions = finder.suggest(args.place)
                if not suggestions:
                    print("No suggestions.")
                for candidate in suggestions:
                    c = candidate.coordinate
                    print(f"{candidate.display_name}  ({c.latitude:.5f}, {c.longitude:.5f})")
                return 0

            result = finder.search(args.place, args.radius, args.category)

            if verbose:
                print_table(result)

            if not args.no_csv:
                csv_path = args.csv or os.path.join(OUTPUT_DIR, export_filename(result.place))
                finder.save_csv(result, csv_path)
                if verbose:
                    print(f"\n  CSV output: {csv_path}")

            if args.json:
                directory = os.path.dirname(args.json)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(args.json, "w", encoding="utf-8") as f:
                    json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
                if verbose:
                    print(f"  JSON output: {args.json}")

        if verbose:
            print(f"\nDone! Found {len(result)} businesses.")

        return 0

    except FinderError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
