import logging
from pathlib import Path

import pytest

GIR_HEADER = (
    '<?xml version="1.0"?>\n'
    '<repository version="1.2"'
    ' xmlns="http://www.gtk.org/introspection/core/1.0"'
    ' xmlns:c="http://www.gtk.org/introspection/c/1.0"'
    ' xmlns:glib="http://www.gtk.org/introspection/glib/1.0">\n'
)


def make_gir(name: str, version: str, body: str = "", includes=()) -> str:
    """Build a minimal GIR document with one namespace"""
    include_lines = "".join(
        f'  <include name="{inc_name}" version="{inc_version}"/>\n' for inc_name, inc_version in includes
    )
    return (
        GIR_HEADER
        + include_lines
        + f'  <namespace name="{name}" version="{version}">\n'
        + body
        + "  </namespace>\n</repository>\n"
    )


class GirDir:
    """Writes GIR files into a temporary input directory"""

    def __init__(self, root: Path):
        self.root = root

    def add(self, name: str, version: str = "1.0", body: str = "", includes=()) -> str:
        file_name = f"{name}-{version}.gir"
        (self.root / file_name).write_text(make_gir(name, version, body, includes))
        return file_name


@pytest.fixture(autouse=True)
def reset_girgen_logger():
    """Undo handlers installed by configure_logging in CLI runs"""
    yield
    logger = logging.getLogger("girgen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def gir_dir(tmp_path: Path) -> GirDir:
    in_dir = tmp_path / "gir"
    in_dir.mkdir()
    return GirDir(in_dir)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path
