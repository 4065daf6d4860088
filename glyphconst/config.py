"""
glyphconst.config - per-font generator options

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from collections import namedtuple
from pathlib import Path


DEFAULT_NAMESPACE = 'IconFontTemplate'
CONFIG_FILENAME = 'IconFontConfig.g.cs'

# config file lines look like
# new IconFontConfig("FluentSystemIcons-Regular.ttf", "FluentIcons", "FluentIcons", "MyApp.Icons"),
_CONFIG_PREFIX = 'new IconFontConfig('

# font file name prefix -> class name prefix
_CLASS_PREFIXES = {
    'FluentSystemIcons': 'FluentIcons',
}


class FontOptions(namedtuple(
        'FontOptions', 'class_name namespace font_alias', defaults=(None, None, None)
    )):
    """Names to use in generated code for one font."""


class ConfigEntry(namedtuple('ConfigEntry', 'font_file font_alias class_name namespace')):
    """One font listed in the config file."""


def parse_config(text):
    """Parse config file text into dict of lower-case font file name -> ConfigEntry."""
    config = {}
    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(_CONFIG_PREFIX):
            continue
        parts = line[len(_CONFIG_PREFIX):].rstrip(');').split(',')
        if len(parts) < 4:
            logging.debug('Ignoring incomplete config line `%s`', line)
            continue
        entry = ConfigEntry(*(
            _part.strip().rstrip(')').rstrip(',').strip().strip('"')
            for _part in parts[:4]
        ))
        config[entry.font_file.lower()] = entry
    return config


def load_config(path):
    """Read config file."""
    logging.debug('Reading config file `%s`', path)
    return parse_config(Path(path).read_text(encoding='utf-8'))


def find_config(font_paths):
    """Find a config file next to the given fonts. Returns path or None."""
    for font_path in font_paths:
        candidate = Path(font_path).parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def derive_class_name(stem):
    """Make a class name from a font file name stem."""
    for prefix, replacement in _CLASS_PREFIXES.items():
        if stem[:len(prefix)].lower() == prefix.lower():
            stem = replacement + stem[len(prefix):]
    return stem.replace('-', '').replace('_', '')


def _is_set(value):
    return bool(value and value.strip())


def resolve_options(font_path, overrides=None, config=None):
    """
    Work out the options for a font file: explicit overrides first, then
    the config file entry, then defaults derived from the file name.
    """
    font_path = Path(font_path)
    overrides = overrides or FontOptions()
    entry = (config or {}).get(font_path.name.lower())
    options = {}
    for field in FontOptions._fields:
        value = getattr(overrides, field)
        if not _is_set(value) and entry is not None:
            value = getattr(entry, field)
        options[field] = value if _is_set(value) else None
    if not options['class_name']:
        options['class_name'] = derive_class_name(font_path.stem)
    if not options['namespace']:
        options['namespace'] = DEFAULT_NAMESPACE
    return FontOptions(**options)
