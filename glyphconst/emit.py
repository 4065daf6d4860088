"""
glyphconst.emit - render glyph catalogues as source text

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import json
from xml.sax.saxutils import escape


# output formats
FORMATS = ('csharp', 'json')


def encode_codepoint(codepoint):
    """Escape a codepoint for a C# string literal."""
    if codepoint <= 0xffff:
        return f'\\u{codepoint:04X}'
    return f'\\U{codepoint:08X}'


def style_class_name(class_name, style, style_count):
    """
    Class name for one style group.
    The style is appended unless it is the only one or the class name
    already ends with it.
    """
    if style_count == 1 or class_name.lower().endswith(style.lower()):
        return class_name
    return class_name + style


def hint_name(class_name, format='csharp'):
    """Name of the generated file for a glyph class."""
    if format == 'json':
        return f'{class_name}.Generated.json'
    return f'{class_name}.Generated.g.cs'


def generate_csharp(catalogue, namespace, class_name, font_alias=None):
    """Render a catalogue as C# source with one static class per style."""
    lines = [
        '// <auto-generated/>',
        '// Generated by glyphconst',
        f'namespace {namespace};',
        '',
    ]
    for style, entries in catalogue.items():
        lines.extend((
            f'public static partial class {style_class_name(class_name, style, len(catalogue))}',
            '{',
        ))
        if font_alias:
            lines.extend((
                '    /// <summary>The font family alias to use in XAML FontFamily bindings.</summary>',
                f'    public const string FontFamily = "{font_alias}";',
                '',
            ))
        for glyph in sorted(entries, key=lambda _e: _e.constant_name):
            lines.extend((
                f"    /// <summary>Glyph '{escape(glyph.raw_name)}' "
                f"mapped to U+{glyph.codepoint:04X}.</summary>",
                f'    public const string {glyph.constant_name} = '
                f'"{encode_codepoint(glyph.codepoint)}";',
                '',
            ))
        if lines[-1] == '':
            lines.pop()
        lines.extend(('}', ''))
    return '\n'.join(lines).rstrip('\n') + '\n'


def generate_json(catalogue):
    """Render a catalogue as a JSON object of style -> list of glyphs."""
    return json.dumps(
        {
            _style: [
                dict(
                    name=_glyph.constant_name,
                    raw_name=_glyph.raw_name,
                    codepoint=_glyph.codepoint,
                )
                for _glyph in _entries
            ]
            for _style, _entries in catalogue.items()
        },
        indent=2,
    ) + '\n'
