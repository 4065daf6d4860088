"""
glyphconst.generate - generate glyph constants for a set of fonts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections import namedtuple
from pathlib import Path

from .catalogue import load_catalogue
from .config import resolve_options
from .emit import generate_csharp, generate_json, hint_name
from .errors import FontFormatError


class GeneratedSource(namedtuple('GeneratedSource', 'hint_name source font_path')):
    """Generated source text for one font."""


def generate_font(font_path, options, format='csharp'):
    """Generate source for a single font file. Raises FontFormatError on failure."""
    catalogue = load_catalogue(font_path)
    logging.info(
        'Parsed %d styles for %s', len(catalogue), options.class_name
    )
    if format == 'json':
        source = generate_json(catalogue)
    elif format == 'csharp':
        source = generate_csharp(
            catalogue, options.namespace, options.class_name, options.font_alias
        )
    else:
        raise ValueError(f'Unknown output format `{format}`')
    return GeneratedSource(hint_name(options.class_name, format), source, font_path)


def generate_all(font_paths, overrides=None, config=None, format='csharp'):
    """
    Generate source for each font file.
    A font that fails is reported and skipped; the others are unaffected.
    Returns list of GeneratedSource and list of paths that failed.
    """
    results, failures = [], []
    for font_path in font_paths:
        font_path = Path(font_path)
        options = resolve_options(font_path, overrides, config)
        logging.debug(
            'File=%s; Class=%s; Namespace=%s',
            font_path, options.class_name, options.namespace
        )
        if not font_path.is_file():
            logging.warning(
                'Unable to locate %s. Glyph constants will not be generated.',
                font_path.name
            )
            failures.append(font_path)
            continue
        try:
            results.append(generate_font(font_path, options, format))
        except (FontFormatError, OSError) as e:
            logging.warning('Failed to parse %s: %s', font_path.name, e)
            failures.append(font_path)
    return results, failures
