"""
Generate glyph constants from icon fonts
(c) 2019--2024 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import sys
import logging
import argparse
from pathlib import Path

import glyphconst
from glyphconst.config import FontOptions, load_config, find_config
from glyphconst.emit import FORMATS
from glyphconst.generate import generate_all
from glyphconst.plumbing import wrap_main


def _get_parser():
    parser = argparse.ArgumentParser(
        prog='glyphconst',
        description='Generate glyph constants from TrueType/OpenType icon fonts.',
    )
    parser.add_argument('infiles', nargs='+', type=Path, help='font files to read')
    parser.add_argument(
        '-c', '--config', type=Path, default=None,
        help=(
            'config file listing per-font options '
            f'(default: {glyphconst.config.CONFIG_FILENAME} next to the fonts, if any)'
        )
    )
    parser.add_argument(
        '-o', '--outdir', type=Path, default=None,
        help='directory to write generated files to (default: standard output)'
    )
    parser.add_argument('--class', dest='class_name', help='class name for the constants')
    parser.add_argument('--namespace', help='namespace for the generated classes')
    parser.add_argument('--alias', dest='font_alias', help='font family alias')
    parser.add_argument(
        '--format', choices=FORMATS, default='csharp', help='output format'
    )
    parser.add_argument('--debug', action='store_true', help='enable debugging output')
    parser.add_argument(
        '--version', action='version', version=f'glyphconst v{glyphconst.__version__}'
    )
    return parser


def main(argv=None):
    args = _get_parser().parse_args(argv)
    status = 1
    with wrap_main(args.debug):
        config_path = args.config or find_config(args.infiles)
        config = load_config(config_path) if config_path else {}
        overrides = FontOptions(args.class_name, args.namespace, args.font_alias)
        results, failures = generate_all(args.infiles, overrides, config, args.format)
        if args.outdir:
            args.outdir.mkdir(parents=True, exist_ok=True)
        for result in results:
            if args.outdir:
                outfile = args.outdir / result.hint_name
                outfile.write_text(result.source, encoding='utf-8')
                logging.info('Emitted %s', outfile)
            else:
                sys.stdout.write(result.source)
        status = 1 if failures else 0
    return status


if __name__ == '__main__':
    sys.exit(main())
