"""Translation driver: GIR repositories in, one Zig module per namespace out"""

import os
from pathlib import Path
from typing import Iterable, Union

from .errors import FileSystemError, TranslationError
from .logging import get_logger
from .parser import parse_file
from .repository import IncludeResolver, Parser, RepositoryLoader, module_file_name
from .types import Namespace, Repository
from .zig_generator import ZigGenerator

logger = get_logger("translator")


class Translator:
    """Translates root repositories and everything they include.

    All state (the repository registry and the list of generated files)
    lives on the instance, so separate runs do not share anything.
    """

    def __init__(self, in_dir: Union[str, Path], out_dir: Union[str, Path], parser: Parser = parse_file):
        self.loader = RepositoryLoader(in_dir, parser, on_load=self.translate_repository)
        self.out_dir = Path(out_dir)
        self.generated: list[Path] = []

    def translate(self, roots: Iterable[str]) -> list[Path]:
        """Translate each root repository; returns the files written"""
        for root in roots:
            self.loader.resolve(root)
        return self.generated

    def translate_repository(self, repo: Repository) -> None:
        """Translate every namespace of a newly loaded repository"""
        for ns in repo.namespaces:
            try:
                self.translate_namespace(repo, ns)
            except TranslationError as e:
                e.details.setdefault("repository", repo.path)
                e.details.setdefault("namespace", ns.name)
                raise

    def translate_namespace(self, repo: Repository, ns: Namespace) -> Path:
        """Write the module for one namespace.

        The file is created up front; its content is only written once the
        whole namespace has been generated.
        """
        path = self.out_dir / module_file_name(ns.name)
        try:
            f = open(path, 'w', encoding='utf-8')
        except OSError as e:
            raise FileSystemError(f"Cannot create {path}: {e.strerror}", {"path": str(path)}) from e
        with f:
            header = IncludeResolver(self.loader.resolve).generate(ns, repo.includes)
            header.append("")
            content = ZigGenerator(ns).generate(header)
            try:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            except OSError as e:
                raise FileSystemError(f"Cannot write {path}: {e.strerror}", {"path": str(path)}) from e
        logger.debug("Wrote %s (%d bytes)", path, len(content))
        self.generated.append(path)
        return path


def translate(in_dir: Union[str, Path], out_dir: Union[str, Path], roots: Iterable[str],
              parser: Parser = parse_file) -> list[Path]:
    """Translate roots found in in_dir, writing modules to out_dir"""
    return Translator(in_dir, out_dir, parser).translate(roots)
