"""
High-level orchestration of the Joomla → Hugo migration.

This module defines a :class:`JoomlaMigrationTool` class that ties
together the extractor, the normalizer, the layout planner, the renderer
and the writer into a complete pipeline.  For every configured year it
selects and sorts the articles of the configured category, then writes
their page bundles, renamed images and thumbnails below the output root.

Configuration is supplied via a JSON file path or directly as a
dictionary.  Run parameters live under the ``migration`` key and are
validated into a :class:`~joomla_to_hugo.models.MigrationSettings`.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from joomla_to_hugo.extractors.joomla_extractor import load_records, select_articles
from joomla_to_hugo.migrators.hugo_writer import migrate_year
from joomla_to_hugo.models import MigrationSettings, YearBundle, YearResult
from joomla_to_hugo.parsers.text_normalizer import NormalizerPatterns, TextNormalizer
from joomla_to_hugo.utils.errors import FileSystemError, SchemaViolation, report_error
from joomla_to_hugo.utils.pre_flight_checks import PreFlightCheckError, run_pre_flight_checks


class JoomlaMigrationTool:
    """
    Encapsulates the state required to migrate Joomla articles to a Hugo
    content tree: the validated settings and the text normalizer, whose
    patterns are compiled once per tool.  Every run recomputes the full
    plan from the source document.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            config = {}

        config.setdefault("migration", {})
        migration = config["migration"]
        migration.setdefault("input_file", os.getenv("JOOMLA_INPUT_FILE", "input.json"))
        migration.setdefault("output_root", os.getenv("HUGO_OUTPUT_ROOT", "site"))
        migration.setdefault("legacy_asset_root", os.getenv("JOOMLA_ASSET_ROOT", "legacy"))
        migration.setdefault("years", [2021])
        migration.setdefault("category_id", 5)
        migration.setdefault("skip_existing_years", True)
        migration.setdefault("dry_run", False)

        self.config = config
        self.settings = MigrationSettings(**migration)
        self.normalizer = TextNormalizer(NormalizerPatterns.compile())

    def log_message(self, message: str, level: str = "INFO") -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        print(f"[{level}] {message}")
        os.makedirs(self.settings.report_dir, exist_ok=True)
        with open(os.path.join(self.settings.report_dir, "migration.log"), "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {level}: {message}\n")

    def extract_records(self) -> List[Dict[str, Any]]:
        self.log_message(f"Loading records from {self.settings.input_file}")
        records = load_records(self.settings.input_file)
        self.log_message(f"Loaded {len(records)} records")
        return records

    def select(self, records: List[Dict[str, Any]], year: int) -> YearBundle:
        bundle = select_articles(records, year, self.settings.category_id, self.normalizer)
        self.log_message(
            f"Selected {len(bundle.articles)} articles for {year} (category {self.settings.category_id})"
        )
        return bundle

    def migrate_bundle(self, bundle: YearBundle) -> YearResult:
        s = self.settings
        return migrate_year(
            bundle,
            s.output_root,
            s.legacy_asset_root,
            skip_existing_year=s.skip_existing_years,
            dry_run=s.dry_run,
            default_thumbnail=s.default_thumbnail,
            year_title=s.year_title,
            download_timeout=s.download_timeout,
            report_dir=s.report_dir,
            log=self.log_message,
        )

    def run(self) -> List[YearResult]:
        """
        Migrate every configured year, in order.

        Years are processed one after the other; a fatal error stops the
        run immediately and leaves the output of earlier years in place.

        :return: One :class:`YearResult` per configured year.
        :raises PreFlightCheckError: if the paths are not usable.
        :raises SchemaViolation: on a malformed or incomplete source record.
        :raises FileSystemError: on the first failing write, copy or download.
        """
        self.log_message("Starting Joomla to Hugo migration.")
        try:
            run_pre_flight_checks(self.settings)
        except PreFlightCheckError as e:
            report_error("PRE_FLIGHT", {}, e, report_dir=self.settings.report_dir)
            self.log_message(f"Pre-flight checks failed: {e}", level="ERROR")
            raise

        results: List[YearResult] = []
        current_year: Optional[int] = None
        try:
            records = self.extract_records()
            for year in self.settings.years:
                current_year = year
                bundle = self.select(records, year)
                result = self.migrate_bundle(bundle)
                results.append(result)
                if result.skipped:
                    continue
                self.log_message(
                    f"Year {year}: {len(result.written)} articles written, "
                    f"{len(result.already_present)} already present, "
                    f"{result.assets_copied} assets copied"
                )
        except SchemaViolation as e:
            report_error("SCHEMA_VIOLATION", {"year": current_year}, e, report_dir=self.settings.report_dir)
            self.log_message(f"Schema violation, aborting: {e}", level="ERROR")
            raise
        except FileSystemError as e:
            report_error("FILESYSTEM", {"year": current_year}, e, report_dir=self.settings.report_dir)
            self.log_message(f"Filesystem error, aborting: {e}", level="ERROR")
            raise

        self.log_message("Migration process finished.")
        return results
