"""
Top-level package for the Joomla → Hugo migration utility.

This package bundles all components required to select articles from a
Joomla JSON export, normalize their markup into plain text, plan a
deterministic page-bundle layout, render Hugo pages and write them
idempotently together with renamed images and thumbnails.  Modules are
split into subpackages:

* :mod:`joomla_to_hugo.extractors` – JSON loading and record selection
* :mod:`joomla_to_hugo.parsers` – text normalization and page rendering
* :mod:`joomla_to_hugo.migrators` – output layout and filesystem writes
* :mod:`joomla_to_hugo.models` – typed values passed between stages
* :mod:`joomla_to_hugo.utils` – errors, event reports and pre-flight checks

Orchestration is handled in :mod:`joomla_to_hugo.migration_tool`.
"""
