"""
Entry point for the Joomla to Hugo migration tool.
"""

import argparse
import sys

from joomla_to_hugo.migration_tool import JoomlaMigrationTool
from joomla_to_hugo.utils.errors import MigrationError
from joomla_to_hugo.utils.pre_flight_checks import PreFlightCheckError

CONFIG_FILE = "config/migration_config.json"


def build_parser():
    parser = argparse.ArgumentParser(description="Migrate Joomla articles into a Hugo content tree.")
    parser.add_argument("--config", default=CONFIG_FILE, help="JSON configuration file")
    parser.add_argument("--input", dest="input_file", help="Exported Joomla JSON document")
    parser.add_argument("--year", dest="years", type=int, action="append", help="Year to migrate (repeatable)")
    parser.add_argument("--category", dest="category_id", type=int, help="Category id to migrate")
    parser.add_argument("--output", dest="output_root", help="Destination directory")
    parser.add_argument("--assets", dest="legacy_asset_root", help="Legacy image directory")
    parser.add_argument(
        "--no-year-skip",
        dest="skip_existing_years",
        action="store_false",
        default=None,
        help="Process years whose content directory already exists, article by article",
    )
    parser.add_argument("--dry-run", dest="dry_run", action="store_true", default=None, help="Only log planned writes")
    return parser


def apply_overrides(config, args):
    migration = config.setdefault("migration", {})
    for key in ("input_file", "years", "category_id", "output_root", "legacy_asset_root", "skip_existing_years", "dry_run"):
        value = getattr(args, key)
        if value is not None:
            migration[key] = value
    return config


def main(argv=None):
    """
    Main function to run the Joomla to Hugo migration tool.
    """
    args = build_parser().parse_args(argv)

    # Load the file first so command-line values win over it.
    config = JoomlaMigrationTool(config_file=args.config).config
    tool = JoomlaMigrationTool(apply_overrides(config, args))

    try:
        tool.run()
    except (PreFlightCheckError, MigrationError) as e:
        print(f"Migration aborted: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
