# core/schema_registry.py
from __future__ import annotations
from typing import Callable, List, Tuple
from sqlalchemy.engine import Engine
import importlib
import logging
import pkgutil

log = logging.getLogger(__name__)

# Schema installer type
SchemaInstaller = Callable[[Engine], None]

# Registry: (name, installer_func)
_REGISTRY: List[Tuple[str, SchemaInstaller]] = []

def register(
    name: str | SchemaInstaller, installer: SchemaInstaller | None = None
) -> SchemaInstaller | Callable[[SchemaInstaller], SchemaInstaller]:
    """
    Registers a schema installer function.
    Can be used as a decorator (@register) or a function call (register("name", fn)).
    Registering the same name twice keeps the first one.
    """
    def _add(key: str, fn: SchemaInstaller) -> SchemaInstaller:
        if key not in {n for n, _ in _REGISTRY}:
            _REGISTRY.append((key, fn))
        return fn

    # Used as @register("name")
    if isinstance(name, str) and installer is None:
        def decorator(fn: SchemaInstaller) -> SchemaInstaller:
            return _add(name, fn)
        return decorator

    # Used as @register
    elif callable(name) and installer is None:
        return _add(name.__name__, name)

    # Used as register("name", fn)
    elif isinstance(name, str) and callable(installer):
        return _add(name, installer)

    raise TypeError("Invalid usage of @register")

def run_all(engine: Engine) -> None:
    """
    Runs all registered schema installers in order.
    A failing installer is logged and the remaining ones still run.
    """
    log.info("SchemaRegistry: running %d installers", len(_REGISTRY))
    for name, installer_fn in _REGISTRY:
        try:
            log.debug("Applying schema: %s", name)
            installer_fn(engine)
        except Exception:
            log.error("Failed to apply schema %s", name, exc_info=True)

def registered_names() -> List[str]:
    return [name for name, _ in _REGISTRY]

def auto_discover(package: str = "schemas") -> None:
    """
    Imports every module of a package to trigger its @register decorators.
    """
    try:
        pkg = importlib.import_module(package)
    except ImportError:
        log.warning("Schema auto_discover: package %s not importable. Skipping.", package)
        return

    for _, module_name, is_pkg in pkgutil.walk_packages(pkg.__path__, prefix=f"{package}."):
        if is_pkg:
            continue
        try:
            importlib.import_module(module_name)
            log.debug("Discovered schema module %s", module_name)
        except Exception:
            log.error("Failed to import schema module %s", module_name, exc_info=True)
