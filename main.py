"""
Main entry point for the region taxonomy command line.

This script browses, validates and exports a region dataset with an optional
overlay.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Tuple

from tqdm import tqdm

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from region_taxonomy.config import TaxonomyConfig
from region_taxonomy.exceptions import (
    ConfigurationError, DataLoadError, FileAccessError, MissingTranslationError,
    RegionNotFoundError, RegionTaxonomyError, ValidationError
)
from region_taxonomy.logging_config import setup_logging
from region_taxonomy.region import Region
from region_taxonomy.taxonomy import RegionTaxonomy
from region_taxonomy.utils.data_utils import records_to_dataframe


EXPORT_COLUMNS = [
    'path', 'type', 'code', 'name', 'depth',
    'alpha_2_code', 'alpha_3_code', 'numeric_code', 'official_name'
]


def depth_argument(value: str) -> int:
    """Parse a non-negative depth for argparse."""
    depth = int(value)
    if depth < 0:
        raise argparse.ArgumentTypeError(f"depth must be 0 or greater, got {depth}")
    return depth


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Region Taxonomy - Browse and validate region data files"
    )

    parser.add_argument(
        "--data",
        required=True,
        help="Directory containing world.yml and the region data tree"
    )

    parser.add_argument(
        "--overlay",
        help="Overlay directory with the same layout as the data directory"
    )

    parser.add_argument(
        "--locale-path",
        action="append",
        default=[],
        help="Locale directory (repeatable; default: <data>/locale and <overlay>/locale)"
    )

    parser.add_argument(
        "--locale",
        default="en",
        help="Locale for region names (default: en)"
    )

    parser.add_argument(
        "--strict-keys",
        action="store_true",
        help="Reject overlay records that have neither code nor alpha_2_code"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--log-file",
        help="Also write log output to this file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    tree_parser = subparsers.add_parser("tree", help="Print the region tree")
    tree_parser.add_argument("path", nargs="?", default="world", help="Region path (default: world)")
    tree_parser.add_argument("--depth", type=depth_argument, default=1, help="Levels to print (default: 1)")

    show_parser = subparsers.add_parser("show", help="Print details of one region")
    show_parser.add_argument("path", help="Region path, e.g. world.us.il")

    subparsers.add_parser("validate", help="Load every region and report failures")

    export_parser = subparsers.add_parser("export", help="Export regions to CSV")
    export_parser.add_argument("--output", required=True, help="CSV file to write")
    export_parser.add_argument("--depth", type=depth_argument, help="Maximum depth to export (default: all)")

    return parser.parse_args(argv)


def print_tree(taxonomy: RegionTaxonomy, path: str, depth: int):
    """Print regions below a path, indented by level."""
    start = taxonomy.find(path)
    print(f"{start.path()}  {start.name or ''}")
    base_depth = start.depth
    for region in taxonomy.walk(start=start, max_depth=depth):
        indent = "  " * (region.depth - base_depth)
        print(f"{indent}{region.code}  {region.name}  [{region.type}]")


def print_region(taxonomy: RegionTaxonomy, path: str):
    """Print the attributes of a single region."""
    region = taxonomy.find(path)
    for key, value in region.to_dict().items():
        if value is not None:
            print(f"  {key}: {value}")
    flag = getattr(region, 'emoji_flag', None)
    if flag:
        print(f"  flag: {flag}")
    print(f"  subregions: {len(region.subregions)}")


def validate_tree(taxonomy: RegionTaxonomy) -> List[Tuple[str, str]]:
    """
    Load every region of the tree.

    Returns:
        List of (parent path, error message) for subtrees that failed to load
    """
    failures = []
    stack: List[Region] = [taxonomy.world]

    with tqdm(desc="Validating regions", unit="region") as progress:
        while stack:
            region = stack.pop()
            try:
                children = region.subregions
            except RegionTaxonomyError as e:
                failures.append((region.path(), str(e)))
                taxonomy.logger.error(f"Failed to load subregions of {region.path()}: {e}")
                continue
            progress.update(len(children))
            stack.extend(reversed(children))

    return failures


def export_tree(taxonomy: RegionTaxonomy, output: str, depth=None) -> int:
    """Write every region up to a depth to CSV and return the row count."""
    rows = [
        region.to_dict()
        for region in tqdm(taxonomy.walk(max_depth=depth), desc="Exporting regions", unit="region")
    ]
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    records_to_dataframe(rows, EXPORT_COLUMNS).to_csv(output_path, index=False, encoding='utf-8')
    return len(rows)


def main(argv=None):
    """Main application entry point."""
    start_time = time.time()
    args = parse_arguments(argv)

    try:
        config = TaxonomyConfig(
            data_path=args.data,
            overlay_path=args.overlay,
            locale_paths=args.locale_path,
            locale=args.locale,
            strict_keys=args.strict_keys,
            log_level=args.log_level,
            log_file=args.log_file
        )

        logger = setup_logging(config)
        logger.debug(f"Configuration: {config.to_dict()}")
        taxonomy = RegionTaxonomy(config, logger)

        if args.command == "tree":
            print_tree(taxonomy, args.path, args.depth)

        elif args.command == "show":
            print_region(taxonomy, args.path)

        elif args.command == "validate":
            failures = validate_tree(taxonomy)
            logger.log_load_statistics(taxonomy.stats)
            print(f"Regions loaded: {taxonomy.stats.regions_built:,}")
            print(f"Files loaded: {taxonomy.stats.files_loaded:,}")
            if failures:
                print(f"\n{len(failures)} subtree(s) failed to load:", file=sys.stderr)
                for path, message in failures:
                    print(f"  {path}: {message}", file=sys.stderr)
                sys.exit(2)
            print("All regions loaded successfully")

        elif args.command == "export":
            count = export_tree(taxonomy, args.output, args.depth)
            print(f"Exported {count:,} regions to {args.output}")

        logger.info(f"Completed in {time.time() - start_time:.2f} seconds")

    except MissingTranslationError as e:
        print(f"\nTranslation Error: {e}", file=sys.stderr)
        print("Every region needs a name in the active or default locale.", file=sys.stderr)
        sys.exit(3)

    except RegionNotFoundError as e:
        print(f"\nNot Found: {e}", file=sys.stderr)
        sys.exit(2)

    except (ConfigurationError, DataLoadError, ValidationError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(2)

    except (FileAccessError, FileNotFoundError) as e:
        print(f"\nFile Error: {e}", file=sys.stderr)
        print("Please check that all data files exist and are readable.", file=sys.stderr)
        sys.exit(4)

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        sys.exit(130)

    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        print("Please check the log output for more details.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
