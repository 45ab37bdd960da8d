"""Command line entry point for girgen"""

import argparse
import time
from pathlib import Path
from typing import Optional

from .errors import TranslationError
from .logging import configure_logging
from .translator import Translator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="girgen",
        description="Generate Zig bindings from GObject Introspection repositories",
    )
    parser.add_argument("roots", nargs="+", help="Repository files to translate (e.g. Gtk-4.0.gir)")
    parser.add_argument("--input-dir", "-i", default=".", help="Directory containing .gir files")
    parser.add_argument("--output-dir", "-o", default="generated", help="Output directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Increase log verbosity")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    start_time = time.perf_counter()

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    translator = Translator(args.input_dir, output_dir)
    try:
        generated = translator.translate(args.roots)
    except TranslationError as e:
        parser.exit(1, f"girgen: {e}\n")

    for path in generated:
        print(f"Generated: {path}")

    elapsed = time.perf_counter() - start_time
    print(f"Generation completed in {elapsed*1000:.2f} ms")
    return 0
