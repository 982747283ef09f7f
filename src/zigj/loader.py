"""Import test modules from files and directories.

Test modules register their tests on the default suite at import time via the
module-level `zigj.test`. Loading a module is therefore all that is needed
to queue its tests.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from zigj.errors import TestLoadError

logger = logging.getLogger(__name__)


def discover(paths: Iterable[Path], pattern: str) -> list[Path]:
    """Expand *paths* into the list of test files to import.

    Files are kept as given (in order); directories are searched recursively
    for files matching *pattern*, sorted by path.

    Raises:
        TestLoadError: If a path does not exist or a file is not a ``.py`` file.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            found = sorted(p for p in path.rglob(pattern) if p.is_file())
            logger.debug("Discovered %d test modules under %s", len(found), path)
            files.extend(found)
        elif path.is_file():
            if path.suffix != ".py":
                raise TestLoadError(str(path), "not a Python file")
            files.append(path)
        else:
            raise TestLoadError(str(path), "no such file or directory")
    return files


def _module_name(path: Path) -> str:
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:8]
    return f"zigj_test_{path.stem}_{digest}"


def load_module(path: Path) -> ModuleType:
    """Import the Python file at *path* under a unique module name.

    Raises:
        TestLoadError: If the module cannot be imported.
    """
    name = _module_name(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise TestLoadError(str(path), "cannot build an import spec")
    module = importlib.util.module_from_spec(spec)
    logger.debug("Importing %s as %s", path, name)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(name, None)
        logger.debug("Import of %s failed", path, exc_info=True)
        raise TestLoadError(str(path), f"{type(exc).__name__}: {exc}") from exc
    return module


def load_paths(paths: Iterable[Path], pattern: str) -> list[ModuleType]:
    """Discover and import every test module under *paths*."""
    modules = [load_module(path) for path in discover(paths, pattern)]
    logger.info("Loaded %d test modules", len(modules))
    return modules
