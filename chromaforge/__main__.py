# Copyright (c) 2026 ChromaForge
# SPDX-License-Identifier: MIT

"""chromaforge: inspect and edit swatch exchange (.ase) palettes.

Usage: chromaforge <command> FILE [options]

Commands:
  info     Version, counts and display color of every swatch
  sort     Sort swatches inside their groups
  convert  Batch-convert models or change swatch types
  merge    Append swatches from another file whose names are new
  css      Print CSS custom properties for all named swatches

Environment variables (overridden by the matching options):
  CHROMAFORGE_CMYK_PROFILE   ICC profile for CMYK swatches
  CHROMAFORGE_SRGB_PROFILE   sRGB destination profile
  CHROMAFORGE_REFERENCES     JSON reference color table
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from chromaforge.codec import read_document, write_document
from chromaforge.config import EngineConfig, build_engine
from chromaforge.errors import ChromaForgeError
from chromaforge.export import summarize, to_css_variables, to_summary_text
from chromaforge.ops import BatchAction, apply_batch_action, merge_documents
from chromaforge.sort import SortCriterion, sort_hierarchically

logger = logging.getLogger("chromaforge")


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  chromaforge info palette.ase\n'
        '  chromaforge sort palette.ase --by hue -o sorted.ase\n'
        '  chromaforge convert palette.ase cmyk-lab --cmyk-profile CoatedFOGRA39.icc\n'
        '  chromaforge merge palette.ase extra.ase\n'
        '  chromaforge css palette.ase > colors.css\n'
    )
    parser = argparse.ArgumentParser(
        prog='chromaforge',
        description='Inspect and edit swatch exchange (.ase) palettes.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument('--cmyk-profile', metavar='PATH', help='ICC profile for CMYK swatches')
    parser.add_argument('--srgb-profile', metavar='PATH', help='sRGB destination profile')
    parser.add_argument('--references', metavar='PATH', help='JSON reference color table')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('info', help='Show document contents')
    p.add_argument('file', type=Path)
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    p = sub.add_parser('sort', help='Sort swatches inside their groups')
    p.add_argument('file', type=Path)
    p.add_argument(
        '-b', '--by',
        choices=[c.value for c in SortCriterion],
        default=SortCriterion.NAME.value,
        help='Sort criterion (default: name)',
    )
    p.add_argument('-o', '--output', type=Path, help='Output file (default: overwrite input)')

    p = sub.add_parser('convert', help='Batch-convert swatches')
    p.add_argument('file', type=Path)
    p.add_argument('action', choices=[a.value for a in BatchAction])
    p.add_argument('-o', '--output', type=Path, help='Output file (default: overwrite input)')

    p = sub.add_parser('merge', help='Append swatches with new names from another file')
    p.add_argument('file', type=Path)
    p.add_argument('other', type=Path)
    p.add_argument('-o', '--output', type=Path, help='Output file (default: overwrite input)')

    p = sub.add_parser('css', help='Print CSS custom properties')
    p.add_argument('file', type=Path)
    p.add_argument('--selector', default=':root', help='Rule selector (default: :root)')

    return parser


def _config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    overrides = {}
    if args.cmyk_profile:
        overrides['cmyk_profile'] = Path(args.cmyk_profile)
    if args.srgb_profile:
        overrides['srgb_profile'] = Path(args.srgb_profile)
    if args.references:
        overrides['reference_table'] = Path(args.references)
    return dataclasses.replace(config, **overrides)


def _run(args: argparse.Namespace) -> int:
    engine = build_engine(_config(args))
    document = read_document(args.file)

    if args.command == 'info':
        if args.json:
            print(json.dumps(summarize(document, engine), indent=2))
        else:
            print(to_summary_text(document, engine))
        return 0

    if args.command == 'css':
        print(to_css_variables(document, engine, selector=args.selector))
        return 0

    if args.command == 'sort':
        document.blocks = sort_hierarchically(document.blocks, args.by, engine)
        message = f'Sorted {len(document.blocks)} blocks by {args.by} (groups preserved)'
    elif args.command == 'convert':
        count = apply_batch_action(document, args.action, engine)
        message = f'Updated {count} swatches' if count else 'No eligible swatches found'
    elif args.command == 'merge':
        count = merge_documents(document, read_document(args.other))
        message = f'Merged {count} unique swatches' if count else 'No unique swatches found'
    else:
        raise AssertionError(f'unhandled command {args.command!r}')

    output = write_document(document, args.output or args.file)
    print(f'{message} -> {output}')
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return _run(args)
    except (ChromaForgeError, OSError) as e:
        logger.debug('Command failed', exc_info=True)
        print(f'error: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
