"""
Validate the Measurable Catalog
===============================

Checks the dimension tables and the measurable catalog for integrity
problems before deployment.

Usage
-----
    python validate_catalog.py
    python validate_catalog.py --catalog path/to/measurables.json

Exits with status 1 if any error is found. Warnings (e.g. units that no
measurable uses) are reported but never fail the run.
"""

import sys
import argparse
import logging
from datetime import datetime
from pathlib import Path
from dotenv import load_dotenv

# Add shared module to path
sys.path.insert(0, str(Path(__file__).parent / "functions"))

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

from shared.catalog import CatalogError, MeasurableCatalog
from shared.catalog_validation import validate_catalog

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Validate the dimension tables and the measurable catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--catalog",
        help="Catalog JSON file (defaults to the configured catalog)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Validation")
    print(f"Timestamp: {datetime.now().isoformat()}")
    print("=" * 60)

    try:
        catalog = MeasurableCatalog.load(args.catalog)
    except CatalogError as e:
        logger.error(str(e))
        sys.exit(1)

    print(f"\nCatalog: {catalog.source_path}")
    print(f"Dimensions: {len(catalog.dimension_ids())}")
    print(f"Measurables: {len(catalog.all_measurables)}")

    result = validate_catalog(catalog)

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  ⚠ {warning}")

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  ✗ {error}")

    print("\n" + "=" * 60)
    if result.is_valid:
        print("✅ Catalog is valid")
    else:
        print(f"❌ Catalog has {len(result.errors)} error(s)")
        sys.exit(1)


if __name__ == "__main__":
    main()
