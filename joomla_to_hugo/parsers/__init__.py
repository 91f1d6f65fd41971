"""
Text normalization and Hugo document rendering.

This subpackage exposes :class:`TextNormalizer` from
:mod:`joomla_to_hugo.parsers.text_normalizer` and the renderers from
:mod:`joomla_to_hugo.parsers.hugo_renderer`.
"""

from .hugo_renderer import render_article, render_year_index
from .text_normalizer import NormalizerPatterns, TextNormalizer, extract_images

__all__ = [
    "NormalizerPatterns",
    "TextNormalizer",
    "extract_images",
    "render_article",
    "render_year_index",
]
