"""
Extractors for Joomla JSON exports.

This subpackage loads the exported document into raw records and selects
the records of one year and category, turning them into sorted
:class:`~joomla_to_hugo.models.Article` values.
"""
