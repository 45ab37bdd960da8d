#!/usr/bin/env python3
"""
Zig binding generator for GObject Introspection repositories

Translates GIR files (and every repository they include) into one Zig
module per namespace.

Usage:
    python generate_bindings.py Gtk-4.0.gir --input-dir /usr/share/gir-1.0 --output-dir generated/
"""

import sys
from pathlib import Path

# Add parent directory to path so girgen package can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from girgen.cli import main


if __name__ == "__main__":
    sys.exit(main())
