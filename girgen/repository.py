"""Repository loading and cross-repository import resolution"""

from pathlib import Path
from typing import Callable, Optional, Union

from .errors import CyclicDependencyError, FileSystemError
from .logging import get_logger
from .parser import parse_file
from .types import Include, Namespace, Repository

logger = get_logger("repository")

Parser = Callable[[Path], Repository]


def module_file_name(name: str) -> str:
    """Get the output file name of a namespace (GObject -> gobject.zig)"""
    return f"{name}.zig".lower()


class RepositoryLoader:
    """Locates, parses and caches repositories by name for one run"""

    def __init__(self, in_dir: Union[str, Path], parser: Parser = parse_file,
                 on_load: Optional[Callable[[Repository], None]] = None):
        self.in_dir = Path(in_dir)
        self.parser = parser
        self.on_load = on_load
        self.repositories: dict[str, Repository] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.repositories

    def resolve(self, name: str) -> Repository:
        """Return the repository called name, parsing it at most once"""
        repo = self.repositories.get(name)
        if repo is not None:
            logger.debug("Using cached repository %s", name)
            return repo
        return self.load(name)

    def load(self, name: str) -> Repository:
        """Parse the repository called name and register it.

        on_load runs after registration, so it may resolve name again
        without parsing it twice.
        """
        path = self.in_dir / name
        if not path.is_file():
            raise FileSystemError(f"Repository {name} not found in {self.in_dir}", {"path": str(path)})
        logger.info("Parsing %s", path)
        repo = self.parser(path)
        self.repositories[name] = repo
        if self.on_load is not None:
            self.on_load(repo)
        return repo


class IncludeResolver:
    """Emits @import lines for the transitive includes of a namespace.

    resolve is called for every include before descending into it; the
    translator passes a loader whose on_load hook translates newly loaded
    repositories.
    """

    def __init__(self, resolve: Callable[[str], Repository]):
        self.resolve = resolve
        self.visiting: list[str] = []

    def generate(self, namespace: Namespace, includes: list[Include]) -> list[str]:
        """Generate the import header of namespace's module"""
        lines = []
        self.emit_includes(includes, set(), lines)
        # GLib references GObject types without including it
        if namespace.name == 'GLib':
            lines.append(self._import_line('GObject'))
        return lines

    def emit_includes(self, includes: list[Include], seen: set[str], lines: list[str]) -> None:
        for include in includes:
            source = include.source
            if source in seen:
                continue
            if source in self.visiting:
                cycle = self.visiting[self.visiting.index(source):] + [source]
                raise CyclicDependencyError(cycle)
            lines.append(self._import_line(include.name))
            repo = self.resolve(source)
            self.visiting.append(source)
            try:
                self.emit_includes(repo.includes, seen, lines)
            finally:
                self.visiting.pop()
            seen.add(source)

    @staticmethod
    def _import_line(name: str) -> str:
        return f'const {name.lower()} = @import("{module_file_name(name)}");'
