import os

from ..models import MigrationSettings


class PreFlightCheckError(Exception):
    """Custom exception for pre-flight check failures."""
    pass


def run_pre_flight_checks(settings: MigrationSettings):
    """
    Verifies that the input document, the legacy asset root and the output
    root are usable before anything is read or written.

    Args:
        settings: The run settings.

    Raises:
        PreFlightCheckError: If any check fails.
    """
    print("[INFO] Running pre-flight checks...")

    if not os.path.isfile(settings.input_file):
        raise PreFlightCheckError(f"Input document not found: {settings.input_file}")

    if not os.path.isdir(settings.legacy_asset_root):
        raise PreFlightCheckError(f"Legacy asset root is not a directory: {settings.legacy_asset_root}")

    if os.path.exists(settings.output_root) and not os.path.isdir(settings.output_root):
        raise PreFlightCheckError(f"Output root exists but is not a directory: {settings.output_root}")

    output_root = os.path.abspath(settings.output_root)
    report_dir = os.path.abspath(settings.report_dir)
    if os.path.commonpath([output_root, report_dir]) == output_root:
        raise PreFlightCheckError(f"Report directory {settings.report_dir} is inside the output root {settings.output_root}")

    if not settings.years:
        raise PreFlightCheckError("No years configured for migration.")

    print("[INFO] Pre-flight checks passed successfully.")
