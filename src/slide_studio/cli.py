#!/usr/bin/env python3
"""
slide-studio command line.

Usage:
    slide-studio unpack <input.pptx> <work-dir>
    slide-studio pack <work-dir> <output.pptx>
    slide-studio create-base [output.pptx] [--unpacked]
    slide-studio list-slides <work-dir>
    slide-studio list-layouts <work-dir>
    slide-studio add-slide <work-dir> [--layout N] [--position P]
    slide-studio clone-slide <work-dir> --source P [--position P]
    slide-studio delete-slide <work-dir> --slide P
    slide-studio add-shape <work-dir> --slide P --type textbox|rect [options]
    slide-studio add-image <work-dir> --slide P --image <path> [--x --y --width --height]
    slide-studio edit-text <work-dir> --slide P (--placeholder TYPE | --shape-id ID) --text TEXT
    slide-studio apply-template <work-dir> <template.potx>
    slide-studio visualize <work-dir> [--slide P]

Geometry options are in inches, font sizes and stroke widths in points.
"""

from pptx.util import Inches, Pt
import argparse
import logging
import sys

from .archive import pack, unpack
from .base import create_base, create_base_pptx
from .errors import SlideStudioError
from .inventory import list_layouts, list_slides
from .shapes import ALIGNMENTS, SHAPE_KINDS, add_image, add_shape
from .slides import add_slide, clone_slide, delete_slide
from .template import apply_template
from .text import edit_text
from .visualize import visualize_slide

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = 2


# ----------------------------------------------------------------------------
# Output
# ----------------------------------------------------------------------------

def print_slides(slides):
    print('Slides:')
    print('=======')
    if not slides:
        print('  (no slides)')
        return
    for slide in slides:
        layout = f' [layout {slide.layout_index}]' if slide.layout_index else ''
        print(f'  {slide.position}. {slide.title}{layout}')
    print(f'\nTotal: {len(slides)} slides')


def print_layouts(layouts):
    print('Available Layouts:')
    print('==================')
    for layout in layouts:
        placeholders = f"({', '.join(layout.placeholders)})" if layout.placeholders else '(no placeholders)'
        print(f'  {layout.index}: {layout.name} {placeholders}')


# ----------------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------------

def cmd_unpack(args):
    unpack(args.input, args.work_dir)


def cmd_pack(args):
    pack(args.work_dir, args.output)


def cmd_create_base(args):
    if args.unpacked:
        create_base(args.output)
    else:
        create_base_pptx(args.output)


def cmd_list_slides(args):
    print_slides(list_slides(args.work_dir))


def cmd_list_layouts(args):
    print_layouts(list_layouts(args.work_dir))


def cmd_add_slide(args):
    add_slide(args.work_dir, args.layout, args.position)


def cmd_clone_slide(args):
    clone_slide(args.work_dir, args.source, args.position)


def cmd_delete_slide(args):
    delete_slide(args.work_dir, args.slide)


def cmd_add_shape(args):
    add_shape(
        args.work_dir, args.slide, args.type,
        x=Inches(args.x), y=Inches(args.y), width=Inches(args.width), height=Inches(args.height),
        text=args.text, color=args.color, fill=args.fill, font_size=args.font_size,
        bold=args.bold, italic=args.italic, align=args.align,
        stroke=args.stroke, stroke_width=Pt(args.stroke_width),
    )


def cmd_add_image(args):
    add_image(
        args.work_dir, args.slide, args.image,
        x=Inches(args.x), y=Inches(args.y),
        width=Inches(args.width) if args.width else None,
        height=Inches(args.height) if args.height else None,
    )


def cmd_edit_text(args):
    edit_text(args.work_dir, args.slide, args.text, placeholder=args.placeholder, shape_id=args.shape_id)


def cmd_apply_template(args):
    remap = apply_template(args.work_dir, args.template)
    for old, new in sorted(remap.items()):
        if old != new:
            logger.info(f'Layout {old} -> {new}')


def cmd_visualize(args):
    print(visualize_slide(args.work_dir, args.slide))


# ----------------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------------

def build_parser():
    parser = argparse.ArgumentParser(
        prog='slide-studio',
        description='Edit unpacked PowerPoint packages part by part',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Log every part written')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors')
    sub = parser.add_subparsers(dest='command', metavar='<command>')
    sub.required = True

    p = sub.add_parser('unpack', help='Extract a .pptx into a working directory')
    p.add_argument('input', help='Input .pptx file')
    p.add_argument('work_dir', help='Output directory')
    p.set_defaults(func=cmd_unpack)

    p = sub.add_parser('pack', help='Pack a working directory into a .pptx')
    p.add_argument('work_dir', help='Working directory')
    p.add_argument('output', help='Output .pptx file')
    p.set_defaults(func=cmd_pack)

    p = sub.add_parser('create-base', help='Generate the 11-layout base presentation')
    p.add_argument('output', nargs='?', default='base.pptx', help='Output .pptx (default: base.pptx)')
    p.add_argument('--unpacked', action='store_true', help='Write an unpacked working directory instead')
    p.set_defaults(func=cmd_create_base)

    p = sub.add_parser('list-slides', help='List slides in presentation order')
    p.add_argument('work_dir')
    p.set_defaults(func=cmd_list_slides)

    p = sub.add_parser('list-layouts', help='List available slide layouts')
    p.add_argument('work_dir')
    p.set_defaults(func=cmd_list_layouts)

    p = sub.add_parser('add-slide', help='Add a slide based on a layout')
    p.add_argument('work_dir')
    p.add_argument('--layout', type=int, default=DEFAULT_LAYOUT, help=f'Layout number (default: {DEFAULT_LAYOUT})')
    p.add_argument('--position', type=int, default=None, help='1-based position (default: append)')
    p.set_defaults(func=cmd_add_slide)

    p = sub.add_parser('clone-slide', help='Duplicate a slide')
    p.add_argument('work_dir')
    p.add_argument('--source', type=int, required=True, help='Position of the slide to copy')
    p.add_argument('--position', type=int, default=None, help='Position of the copy (default: append)')
    p.set_defaults(func=cmd_clone_slide)

    p = sub.add_parser('delete-slide', help='Delete a slide')
    p.add_argument('work_dir')
    p.add_argument('--slide', type=int, required=True, help='Position of the slide to delete')
    p.set_defaults(func=cmd_delete_slide)

    p = sub.add_parser('add-shape', help='Add a text box or rectangle')
    p.add_argument('work_dir')
    p.add_argument('--slide', type=int, required=True, help='Slide position')
    p.add_argument('--type', required=True, help=f"Shape type: {', '.join(SHAPE_KINDS)}")
    p.add_argument('--text', default='', help='Text box text')
    p.add_argument('--x', type=float, default=1.0, help='Left offset in inches (default: 1)')
    p.add_argument('--y', type=float, default=1.0, help='Top offset in inches (default: 1)')
    p.add_argument('--width', type=float, default=4.0, help='Width in inches (default: 4)')
    p.add_argument('--height', type=float, default=1.0, help='Height in inches (default: 1)')
    p.add_argument('--color', default='dk1', help='Text colour: theme name or RGB hex (default: dk1)')
    p.add_argument('--fill', default=None, help='Fill colour: theme name or RGB hex')
    p.add_argument('--font-size', type=float, default=18, help='Font size in points (default: 18)')
    p.add_argument('--bold', action='store_true')
    p.add_argument('--italic', action='store_true')
    p.add_argument('--align', choices=list(ALIGNMENTS), default='left')
    p.add_argument('--stroke', default=None, help='Outline colour for rectangles')
    p.add_argument('--stroke-width', type=float, default=1, help='Outline width in points (default: 1)')
    p.set_defaults(func=cmd_add_shape)

    p = sub.add_parser('add-image', help='Add a picture')
    p.add_argument('work_dir')
    p.add_argument('--slide', type=int, required=True, help='Slide position')
    p.add_argument('--image', required=True, help='Image file')
    p.add_argument('--x', type=float, default=1.0, help='Left offset in inches (default: 1)')
    p.add_argument('--y', type=float, default=1.0, help='Top offset in inches (default: 1)')
    p.add_argument('--width', type=float, default=None, help='Width in inches (default: pixel size)')
    p.add_argument('--height', type=float, default=None, help='Height in inches (default: pixel size)')
    p.set_defaults(func=cmd_add_image)

    p = sub.add_parser('edit-text', help='Replace the text of a shape')
    p.add_argument('work_dir')
    p.add_argument('--slide', type=int, required=True, help='Slide position')
    target = p.add_mutually_exclusive_group(required=True)
    target.add_argument('--placeholder', help='Placeholder type (title, ctrTitle, subTitle, body, ...)')
    target.add_argument('--shape-id', type=int, help='Shape id')
    p.add_argument('--text', required=True, help='New text; each line becomes a paragraph')
    p.set_defaults(func=cmd_edit_text)

    p = sub.add_parser('apply-template', help='Apply the theme, masters and layouts of a .potx')
    p.add_argument('work_dir')
    p.add_argument('template', help='Template .potx/.pptx')
    p.set_defaults(func=cmd_apply_template)

    p = sub.add_parser('visualize', help='Draw a slide layout as ASCII art')
    p.add_argument('work_dir')
    p.add_argument('--slide', type=int, default=1, help='Slide position (default: 1)')
    p.set_defaults(func=cmd_visualize)

    return parser


def configure_logging(verbose=False, quiet=False):
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')
    logging.captureWarnings(True)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        args.func(args)
    except (SlideStudioError, ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
