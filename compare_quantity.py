"""
Compare a Quantity
==================

Runs a comparison from the command line and prints the ranked matches.

Usage
-----
    python compare_quantity.py 70 micrometer length
    python compare_quantity.py 2.5k kilometer length --exclude american
    python compare_quantity.py 2^30 byte data --max-results 5 --json

VALUE accepts plain numbers, scientific notation, thousands separators,
power notation (2^10) and k/m/b/t suffixes.

Environment
-----------
SCALE_COMPARE_CATALOG_PATH and SCALE_COMPARE_CONFIG_PATH may be set in a
.env file.
"""

import sys
import argparse
import logging
from pathlib import Path
from dotenv import load_dotenv

# Add shared module to path
sys.path.insert(0, str(Path(__file__).parent / "functions"))

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

from shared.helpers import parse_numeric_expression
from shared.models import ComparisonFilters, ComparisonQuery, ResultCutoff
from fn_compare.engine import ComparisonError, compare

logger = logging.getLogger(__name__)


def build_query(args) -> ComparisonQuery:
    value = parse_numeric_expression(args.value)
    if value is None:
        raise ValueError(f"Could not parse value: {args.value}")

    filters = None
    if args.include or args.exclude:
        filters = ComparisonFilters(include_tags=args.include, exclude_tags=args.exclude)

    cutoff = None
    if args.min_results is not None or args.max_results is not None:
        cutoff = ResultCutoff(min_results=args.min_results, max_results=args.max_results)

    return ComparisonQuery(
        value=value,
        unit=args.unit,
        dimension=args.dimension,
        filters=filters,
        cutoff=cutoff,
    )


def print_results(response):
    query = response.query
    print("=" * 72)
    print(f"{query.value:g} {query.unit} ({query.dimension})")
    print(f"= {response.query_value_in_base_units:g} in base units")
    print("=" * 72)

    if not response.results:
        print("\nNo comparisons found.")
        return

    print(f"\n{'#':>3}  {'Score':>6}  {'Ratio':>10}  Measurable")
    print("-" * 72)
    for rank, result in enumerate(response.results, start=1):
        m = result.measurable
        print(f"{rank:>3}  {result.composite_score:>6.3f}  {result.ratio:>10.4g}  {m.name} ({m.value:g} {m.unit})")


def main():
    parser = argparse.ArgumentParser(
        description="Find human-scale comparisons for a quantity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("value", help="Numeric value, e.g. 70, 1.5e6, 2^10, 3k")
    parser.add_argument("unit", help="Unit id, e.g. micrometer")
    parser.add_argument("dimension", help="Dimension id, e.g. length")

    parser.add_argument(
        "--include",
        nargs="+",
        metavar="TAG",
        help="Only keep measurables carrying all of these tags",
    )

    parser.add_argument(
        "--exclude",
        nargs="+",
        metavar="TAG",
        help="Drop measurables carrying any of these tags",
    )

    parser.add_argument(
        "--min-results",
        type=int,
        help="Always return at least this many results",
    )

    parser.add_argument(
        "--max-results",
        type=int,
        help="Never return more than this many results",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the raw JSON response",
    )

    args = parser.parse_args()

    try:
        query = build_query(args)
        response = compare(query)
    except (ValueError, ComparisonError) as e:
        logger.error(str(e))
        sys.exit(1)

    if args.json:
        print(response.model_dump_json(indent=2))
    else:
        print_results(response)


if __name__ == "__main__":
    main()
