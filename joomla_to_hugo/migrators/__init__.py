"""
Hugo output migrators.

This subpackage derives the deterministic output layout of a year
(:mod:`joomla_to_hugo.migrators.hugo_layout`) and performs the idempotent
writes and asset copies (:mod:`joomla_to_hugo.migrators.hugo_writer`).
"""
