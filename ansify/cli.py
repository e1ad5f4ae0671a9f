#!/usr/bin/env python3
# ansify/cli.py
"""
Entry point for ANSIfy.
Loads configuration, fetches the image and prints it as block art.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from ansify.config import RENDER_FORMATS, Config
from ansify.errors import AnsifyError, ImageLoadError
from ansify.loader import ImageLoader
from ansify.logging_conf import setup_logging
from ansify.pipeline import ansify_image
from ansify.rendering.html_mode import HtmlBackend
from ansify.rendering.renderer import FrameFrag, Renderer
from ansify.version import version_info

log = logging.getLogger(__name__)


def _cell_size(value: str) -> Tuple[int, int]:
    try:
        w, h = (int(p) for p in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from None
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError("cell dimensions must be positive")
    return w, h


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ansify",
        description="Render an image as colored block glyphs.",
    )
    parser.add_argument("source", help="Image file path or http(s) URL.")
    parser.add_argument("--config", help="Path to a JSON config file (default: $ANSIFY_CONFIG or per-user config).")
    parser.add_argument("--shading", action="store_true", default=None,
                        help="Draw dark blocks with the shade glyph.")
    parser.add_argument("--legacy-style", action="store_true", default=None,
                        help="Draw every non-blank block with the shade glyph.")
    parser.add_argument("--ignore-whitespaces", action="store_true", default=None,
                        help="Leave pure-white blocks blank.")
    parser.add_argument("--threshold", type=int, default=None,
                        help="Brightness (0-255) at or below which a block counts as dark (default: 125).")
    parser.add_argument("--cell-size", type=_cell_size, default=None, metavar="WxH",
                        help="Block size in source pixels (default: 14x26).")
    parser.add_argument("--workers", type=int, default=None,
                        help="Threads used to sample rows (default: 1).")
    parser.add_argument("--format", choices=RENDER_FORMATS, default=None,
                        help="Output format (default: terminal).")
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout.")
    parser.add_argument("--log-level", help="Override the configured log level.")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    art = {}
    if args.shading is not None:
        art["shading"] = True
    if args.legacy_style is not None:
        art["legacy_style"] = True
    if args.ignore_whitespaces is not None:
        art["ignore_whitespaces"] = True
    if args.threshold is not None:
        art["brightness_threshold"] = args.threshold
    if args.cell_size is not None:
        art["cell_width"], art["cell_height"] = args.cell_size
    if args.workers is not None:
        art["workers"] = args.workers

    render = {}
    if args.format is not None:
        render["format"] = args.format
    if args.no_color:
        render["color"] = False
    return {"art": art, "render": render}


def _emit_terminal(frame: FrameFrag, out) -> None:
    fragments = []
    for line in frame:
        fragments.extend(line)
        fragments.append(("", "\n"))
    print_formatted_text(FormattedText(fragments), end="", file=out)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    cfg.update(_overrides(args))
    setup_logging(cfg, args.log_level)

    fmt = cfg.render_format
    use_color = cfg["render"]["color"]
    loader = ImageLoader.from_config(cfg)
    try:
        img = loader.load_image(args.source)
    except ImageLoadError as exc:
        log.error("%s", exc)
        print(f"{exc}. Check the path, or whether the URL is reachable.", file=sys.stderr)
        return 1
    finally:
        loader.close()

    try:
        rows = ansify_image(img, cfg.art_config())
        if fmt == "html":
            result = HtmlBackend().render_document(rows, title=args.source, use_color=use_color)
        else:
            result = Renderer().render(rows, fmt, use_color)
    except AnsifyError as exc:
        log.error("%s", exc)
        print(f"Cannot convert {args.source}: {exc}", file=sys.stderr)
        return 1

    try:
        out = open(args.output, "w", encoding="utf-8") if args.output else sys.stdout
    except OSError as exc:
        log.error("Cannot write %s: %s", args.output, exc)
        print(f"Cannot write {args.output}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    try:
        if fmt == "terminal":
            _emit_terminal(result, out)
        else:
            out.write(result)
            if not result.endswith("\n"):
                out.write("\n")
    finally:
        if args.output:
            out.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
