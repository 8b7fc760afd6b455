# -*- coding: utf-8 -*-
"""
src/fontprint/cli.py

Command line front end for FontPrint.

    fontprint analyze boxes page.json --width 1240 --height 1754 --save
    fontprint analyze structured --top 1440 --bottom 1440 --left 1800 --right 1800 --font-size 21
    fontprint analyze text notes.txt
    fontprint analyze image scan.png
    fontprint compare left.json right.json
    fontprint corpus list | remove INDEX | match FILE | export FILE | import FILE
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .app import FontPrintApp
from .config import Config
from .core.models import FontPrint, GlyphBox, Surface
from .corpus import JsonFileCorpus
from .exceptions import FontPrintError
from .utils.clipboard_manager import copy_to_clipboard

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_boxes_file(path: Path, width: Optional[float], height: Optional[float]) -> Tuple[List[GlyphBox], Surface]:
    """
    Reads recognizer output from JSON.

    The file holds either a list of boxes or an object
    `{"boxes": [...], "surface": {"width": .., "height": ..}}`. Explicit
    `width`/`height` override the stored surface.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        records, stored_surface = data, {}
    else:
        records, stored_surface = data.get("boxes") or [], data.get("surface") or {}

    surface_width = width if width is not None else stored_surface.get("width")
    surface_height = height if height is not None else stored_surface.get("height")
    if surface_width is None or surface_height is None:
        raise FontPrintError(f"No page surface for '{path}': pass --width and --height")

    boxes = [GlyphBox.from_dict(record) for record in records]
    return boxes, Surface(float(surface_width), float(surface_height))


def load_fontprint_file(path: Path) -> FontPrint:
    with open(path, "r", encoding="utf-8") as f:
        try:
            return FontPrint.from_dict(json.load(f))
        except (KeyError, TypeError, ValueError) as e:
            raise FontPrintError(f"'{path}' is not an exported FontPrint: {e}") from e


def emit(text: str, output: Optional[Path] = None):
    if output is None:
        print(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {output}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fontprint",
        description="Fingerprint and compare the typographic layout of documents",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="Path to config.ini (default: application directory)")
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Build the FontPrint of a document")
    kinds = analyze.add_subparsers(dest="kind", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--save", action="store_true", help="Append the result to the corpus")
    common.add_argument("--copy", action="store_true", help="Copy the JSON to the clipboard")
    common.add_argument("-o", "--output", type=Path, help="Write the JSON to a file")

    boxes = kinds.add_parser("boxes", parents=[common], help="Recognizer boxes stored as JSON")
    boxes.add_argument("path", type=Path)
    boxes.add_argument("--width", type=float, help="Page width in pixels")
    boxes.add_argument("--height", type=float, help="Page height in pixels")

    structured = kinds.add_parser("structured", parents=[common], help="Declared page margins and font size")
    for side in ("top", "bottom", "left", "right"):
        structured.add_argument(f"--{side}", type=float, metavar="TWIPS", help=f"{side} margin in twentieths of a point")
    structured.add_argument("--font-size", type=float, metavar="HALF_POINTS", help="Average font size in half-points")

    text = kinds.add_parser("text", parents=[common], help="Plain text file (virtual rendering)")
    text.add_argument("path", type=Path)

    image = kinds.add_parser("image", parents=[common], help="Page image, recognized with EasyOCR")
    image.add_argument("path", type=Path)
    image.add_argument("--lang", action="append", dest="languages", help="OCR language code (repeatable)")

    comp = commands.add_parser("compare", help="Compare two exported FontPrints")
    comp.add_argument("left", type=Path)
    comp.add_argument("right", type=Path)

    corpus = commands.add_parser("corpus", help="Manage the stored fingerprint corpus")
    actions = corpus.add_subparsers(dest="action", required=True)
    actions.add_parser("list", help="List stored fingerprints")
    remove = actions.add_parser("remove", help="Delete a stored fingerprint")
    remove.add_argument("index", type=int)
    match = actions.add_parser("match", help="Find the stored fingerprints closest to one")
    match.add_argument("path", type=Path)
    match.add_argument("--top", type=int, help="Number of matches (default: results_count)")
    export = actions.add_parser("export", help="Write the corpus to a JSON file")
    export.add_argument("path", type=Path)
    imp = actions.add_parser("import", help="Replace the corpus with a JSON file")
    imp.add_argument("path", type=Path)

    return parser.parse_args(argv)


def run_analyze(args: argparse.Namespace, app: FontPrintApp) -> int:
    if args.kind == "boxes":
        boxes, surface = load_boxes_file(args.path, args.width, args.height)
        fontprint = app.analyze_boxes(boxes, surface, save=args.save)
    elif args.kind == "structured":
        margins = {side: getattr(args, side) for side in ("top", "bottom", "left", "right") if getattr(args, side) is not None}
        fontprint = app.analyze_structured(margins, args.font_size, save=args.save)
    elif args.kind == "text":
        fontprint = app.analyze_text(args.path.read_text(encoding="utf-8"), save=args.save)
    else:
        fontprint = app.analyze_image(args.path, save=args.save, languages=args.languages)

    payload = fontprint.to_json()
    emit(payload, args.output)
    if args.copy and not copy_to_clipboard(payload, f"FontPrint {fontprint.id}"):
        return 1
    return 0


def run_corpus(args: argparse.Namespace, app: FontPrintApp, corpus: JsonFileCorpus, results_count: int) -> int:
    if args.action == "list":
        for i, fp in enumerate(corpus.list()):
            font = fp.avg_font_size_px if fp.avg_font_size_px is not None else "-"
            gap = fp.line_gap_px if fp.line_gap_px is not None else "-"
            print(f"{i}\t{fp.id}\t{fp.source.value}\t{fp.created_at}\tfont {font}px / gap {gap}px")
    elif args.action == "remove":
        removed = corpus.remove(args.index)
        print(f"Removed {removed.id}")
    elif args.action == "match":
        target = load_fontprint_file(args.path)
        for fp, score in app.find_best_matches(target, args.top or results_count):
            print(f"{score * 100:.1f}%\t{fp.id}\t{fp.source.value}\t{fp.fingerprint_hash[:16]}")
    elif args.action == "export":
        count = corpus.export_to(args.path)
        print(f"Exported {count} fingerprints to {args.path}")
    else:
        count = corpus.import_from(args.path)
        print(f"Imported {count} fingerprints from {args.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    config = Config(args.config)
    corpus = JsonFileCorpus(config.corpus_path)
    app = FontPrintApp(corpus, config.settings)

    try:
        if args.command == "analyze":
            return run_analyze(args, app)
        if args.command == "compare":
            report = app.compare(load_fontprint_file(args.left), load_fontprint_file(args.right))
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
            return 0
        return run_corpus(args, app, corpus, config.results_count)
    except (FontPrintError, OSError, json.JSONDecodeError, ImportError) as e:
        logger.error(f"{e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
