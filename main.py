from __future__ import annotations
import logging
import os
import sys
from backend import RecordingBackend
from config import RenderOptions
from document import Document
from errors import SvgError
from renderer import RasterBackend

USAGE = """SVG fill renderer
Usage: python main.py <svg_file1> [svg_file2] ... [options]

Options:
  -v, --verbose         Print detailed information
  -o, --output PATH     Specify output directory or file pattern
  -w, --width WIDTH     Override output width in pixels
  -h, --height HEIGHT   Override output height in pixels
  -b, --background RGB  Background color as R,G,B (default: 255,255,255)
  -aa, --anti-aliasing  Enable anti-aliasing (default: off)
  --skip-render         Skip rendering (only parse and validate)
  --trace               Print the drawing calls instead of rendering
  --strict              Reject path data containing invalid numbers
  --css-shorthand       Expand #abc as #aabbcc instead of #a0b0c0
  --legacy-arcs         Always trace arcs with arc_negative

Examples:
  python main.py test.svg
  python main.py *.svg -v
  python main.py test.svg -w 800 -h 600
  python main.py test.svg -b 0,0,0  # Black background"""


def render_document(document: Document, width: int = None, height: int = None) -> RasterBackend:
    width = width or int(round(document.viewport_width))
    height = height or int(round(document.viewport_height))
    options = document.options

    renderer = RasterBackend(width, height, background_color=options.background,
                             anti_aliasing=options.anti_aliasing,
                             tolerance=options.curve_tolerance)
    document.apply_viewbox(renderer, width, height)
    document.draw(renderer)
    return renderer


def trace_document(document: Document) -> str:
    recorder = RecordingBackend()
    document.draw(recorder)
    return recorder.format_calls()


def process_svg_file(svg_path: str, output_path: str = None, verbose: bool = False,
                     width: int = None, height: int = None,
                     options: RenderOptions = None,
                     skip_render: bool = False, trace: bool = False) -> bool:
    if not os.path.exists(svg_path):
        print(f"Error: File not found: {svg_path}")
        return False

    if not svg_path.lower().endswith('.svg'):
        print(f"Warning: {svg_path} does not have .svg extension")

    options = options or RenderOptions()

    try:
        document = Document.from_file(svg_path, options)
    except (SvgError, OSError) as e:
        print(f"Error processing {svg_path}: {e}")
        return False

    if verbose:
        print(f"\nProcessing: {svg_path}")
        print(f"Viewport: {document.viewport_width:g}x{document.viewport_height:g}")
        if document.viewbox:
            print(f"ViewBox: {document.viewbox}")
        print(f"Shapes: {len(document.shapes)}")
        if document.svg_tree is not None:
            print(document.svg_tree.format_tree())
        for line in document.validation_report():
            print(line)

    if not document.is_valid():
        print(f"Error: {svg_path} has validation errors")
        return False

    if trace:
        print(trace_document(document))
        return True

    if output_path is None:
        base_name = os.path.splitext(os.path.basename(svg_path))[0]
        output_path = f"{base_name}.png"

    if skip_render:
        print(f"[OK] Parsed: {svg_path} -> {output_path} (rendering skipped)")
        return True

    renderer = render_document(document, width, height)

    from PIL import Image
    image = Image.fromarray(renderer.get_rgb_buffer(), 'RGB')
    try:
        image.save(output_path)
    except OSError as e:
        print(f"Error saving PNG: {e}")
        return False

    if verbose:
        print(f"[OK] Rendered and saved: {output_path}")
    else:
        print(f"[OK] {svg_path} -> {output_path}")
    return True


def _parse_positive_int(value: str, name: str) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"{name} must be positive")
    return number


def _parse_background(value: str) -> tuple[int, int, int]:
    rgb_parts = value.split(',')
    if len(rgb_parts) != 3:
        raise ValueError("Background must be R,G,B (e.g., 255,255,255)")
    r, g, b = (max(0, min(255, int(part.strip()))) for part in rgb_parts)
    return (r, g, b)


def main(argv: list[str] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    if len(args) == 0:
        print(USAGE)
        return 0

    verbose = False
    output_dir = None
    width = None
    height = None
    background = (255, 255, 255)
    skip_render = False
    trace = False
    anti_aliasing = False
    token_policy = 'warn'
    color_shorthand = 'interleave'
    legacy_arcs = False
    svg_files = []

    i = 0
    while i < len(args):
        arg = args[i]
        value = args[i + 1] if i + 1 < len(args) else None
        try:
            if arg in ['-v', '--verbose']:
                verbose = True
            elif arg in ['-o', '--output']:
                if value is None:
                    raise ValueError("-o/--output requires a path argument")
                output_dir = value
                i += 1
            elif arg in ['-w', '--width']:
                if value is None:
                    raise ValueError("-w/--width requires a value")
                width = _parse_positive_int(value, "Width")
                i += 1
            elif arg in ['-h', '--height']:
                if value is None:
                    raise ValueError("-h/--height requires a value")
                height = _parse_positive_int(value, "Height")
                i += 1
            elif arg in ['-b', '--background']:
                if value is None:
                    raise ValueError("-b/--background requires R,G,B values")
                background = _parse_background(value)
                i += 1
            elif arg in ['-aa', '--anti-aliasing']:
                if value is not None and value.lower() in ['true', '1', 'yes', 'on']:
                    anti_aliasing = True
                    i += 1
                elif value is not None and value.lower() in ['false', '0', 'no', 'off']:
                    anti_aliasing = False
                    i += 1
                else:
                    anti_aliasing = True
            elif arg == '--skip-render':
                skip_render = True
            elif arg == '--trace':
                trace = True
            elif arg == '--strict':
                token_policy = 'error'
            elif arg == '--css-shorthand':
                color_shorthand = 'duplicate'
            elif arg == '--legacy-arcs':
                legacy_arcs = True
            elif arg.startswith('-'):
                print(f"Unknown option: {arg}")
                return 2
            else:
                svg_files.append(arg)
        except ValueError as e:
            print(f"Error: {e}")
            return 2
        i += 1

    if len(svg_files) == 0:
        print("Error: No SVG files specified")
        return 2

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    options = RenderOptions(token_policy=token_policy, color_shorthand=color_shorthand,
                            anti_aliasing=anti_aliasing, background=background,
                            legacy_arc_direction=legacy_arcs)

    success_count = 0
    for svg_file in svg_files:
        output_path = None
        if output_dir:
            if os.path.isdir(output_dir):
                base_name = os.path.splitext(os.path.basename(svg_file))[0]
                output_path = os.path.join(output_dir, f"{base_name}.png")
            elif len(svg_files) == 1:
                output_path = output_dir
            else:
                print("Warning: -o with multiple files requires a directory, not a file")

        if process_svg_file(svg_file, output_path, verbose, width, height, options,
                            skip_render, trace):
            success_count += 1

    print(f"\nProcessed {success_count}/{len(svg_files)} file(s) successfully")
    return 0 if success_count == len(svg_files) else 1


if __name__ == "__main__":
    sys.exit(main())
