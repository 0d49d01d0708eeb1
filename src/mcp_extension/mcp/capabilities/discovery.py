"""
Capability Discovery for MCP tools and resources.

This module finds capability classes from the explicit built-in list, from
Python packages, and from the directories named in the discovery manifest.
"""

import hashlib
import importlib
import importlib.util
import inspect
import pkgutil
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from mcp_extension.mcp.capabilities.base import Capability, ResourceCapability, ToolCapability
from mcp_extension.mcp.capabilities.registry import CapabilityRegistry
from mcp_extension.utils.errors import DiscoveryError
from mcp_extension.utils.logging import setup_logging

logger = setup_logging(__name__)

CONCRETE_BASES = (ToolCapability, ResourceCapability)


class CapabilityDiscovery:
    """Discovery and registration of capability classes."""

    def __init__(self, registry: CapabilityRegistry):
        """Initialize capability discovery.

        Args:
            registry: Capability registry to register discovered classes
        """
        self.registry = registry
        self._discovered_modules: dict[str, str] = {}
        self._discovery_paths: list[Path] = []

    def add_discovery_path(self, path: Path) -> None:
        """Add a directory to scan for capabilities.

        Raises:
            DiscoveryError: If the path is not an existing directory
        """
        if not path.is_dir():
            raise DiscoveryError(f"Capability scan directory does not exist: {path}", context={"path": str(path)})
        self._discovery_paths.append(path)
        logger.info(f"Added capability discovery path: {path}")

    def discover_from_directory(self, directory: Path, recursive: bool = True) -> list[type[Capability]]:
        """Discover capability classes from the Python files in a directory.

        Files whose name starts with an underscore are skipped.

        Raises:
            DiscoveryError: If the directory is missing or a module fails to import
        """
        if not directory.is_dir():
            raise DiscoveryError(f"Capability scan directory does not exist: {directory}")

        logger.info(f"Discovering capabilities in directory: {directory}")

        pattern = "**/*.py" if recursive else "*.py"
        discovered = []
        for py_file in sorted(directory.glob(pattern)):
            if py_file.name.startswith('_'):
                continue
            discovered.extend(self._extract_capabilities_from_module(self._load_module_from_file(py_file)))

        logger.info(f"Discovered {len(discovered)} capabilities in {directory}")
        return discovered

    def discover_from_package(self, package_name: str) -> list[type[Capability]]:
        """Discover capability classes from a Python package or module.

        Raises:
            DiscoveryError: If the package or one of its modules fails to import
        """
        package = self._import(package_name)
        discovered = self._extract_capabilities_from_module(package)

        if hasattr(package, '__path__'):
            for _, modname, _ in pkgutil.iter_modules(package.__path__):
                module = self._import(f"{package_name}.{modname}")
                discovered.extend(self._extract_capabilities_from_module(module))

        logger.info(f"Discovered {len(discovered)} capabilities in package {package_name}")
        return discovered

    def discover_builtin(self) -> list[type[Capability]]:
        """Return the explicitly registered built-in capability classes."""
        from mcp_extension.mcp.capabilities.examples import get_builtin_capabilities
        return get_builtin_capabilities()

    def _import(self, module_name: str) -> ModuleType:
        try:
            return importlib.import_module(module_name)
        except Exception as e:
            raise DiscoveryError(
                f"Failed to import capability module {module_name}: {e}",
                context={"module": module_name},
            ) from e

    def _load_module_from_file(self, file_path: Path) -> ModuleType:
        """Import a scanned file, by its package name when it lives inside an importable package."""
        file_path = file_path.resolve()
        key = str(file_path)
        if key in self._discovered_modules:
            return sys.modules[self._discovered_modules[key]]

        module_name = self._package_module_name(file_path)
        if module_name is not None:
            module = self._import(module_name)
        else:
            module_name = f"mcp_extension_scan_{hashlib.sha1(str(file_path.parent).encode()).hexdigest()[:8]}_{file_path.stem}"
            spec = importlib.util.spec_from_file_location(module_name, file_path)
            if spec is None or spec.loader is None:
                raise DiscoveryError(f"Could not create module spec for {file_path}")

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except Exception as e:
                del sys.modules[module_name]
                raise DiscoveryError(
                    f"Failed to load capability module from {file_path}: {e}",
                    context={"path": str(file_path)},
                ) from e

        self._discovered_modules[key] = module_name
        return module

    def _package_module_name(self, file_path: Path) -> str | None:
        """Dotted name of ``file_path`` if its enclosing packages are importable from ``sys.path``."""
        parts = [file_path.stem]
        parent = file_path.parent
        while (parent / "__init__.py").exists():
            parts.insert(0, parent.name)
            parent = parent.parent

        if len(parts) == 1:
            return None

        dotted = ".".join(parts)
        try:
            spec = importlib.util.find_spec(dotted)
        except ModuleNotFoundError:
            return None
        except Exception as e:
            raise DiscoveryError(f"Failed to import the package of {file_path}: {e}") from e

        if spec is None or spec.origin is None or Path(spec.origin).resolve() != file_path:
            return None
        return dotted

    def _extract_capabilities_from_module(self, module: ModuleType) -> list[type[Capability]]:
        """Extract concrete capability classes defined in ``module`` (not imported into it)."""
        capabilities = []

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, CONCRETE_BASES) and
                    obj not in CONCRETE_BASES and
                    not inspect.isabstract(obj) and
                    obj.__module__ == module.__name__):
                capabilities.append(obj)
                logger.debug(f"Found capability class: {obj.__name__}")

        return capabilities

    def auto_discover(self,
                      search_directories: list[Path] | None = None,
                      search_packages: list[str] | None = None,
                      include_builtin: bool = True) -> dict[str, int]:
        """Discover capability classes from every source and register them.

        A class found through several sources is registered once.

        Returns:
            Dictionary with discovery statistics

        Raises:
            DiscoveryError: If any source fails to load
            ConfigurationError: If a class cannot be wired or collides with another
        """
        stats = {
            "directories_searched": 0,
            "packages_searched": 0,
            "capabilities_discovered": 0,
            "capabilities_registered": 0,
        }

        discovered: list[type[Capability]] = []

        if include_builtin:
            discovered.extend(self.discover_builtin())

        for directory in search_directories if search_directories is not None else self._discovery_paths:
            discovered.extend(self.discover_from_directory(directory))
            stats["directories_searched"] += 1

        for package_name in search_packages or []:
            discovered.extend(self.discover_from_package(package_name))
            stats["packages_searched"] += 1

        unique = list(dict.fromkeys(discovered))
        stats["capabilities_discovered"] = len(unique)

        for capability_class in unique:
            self.registry.register_class(capability_class)
            stats["capabilities_registered"] += 1

        logger.info(f"Auto-discovery complete: {stats}")
        return stats

    def get_discovery_info(self) -> dict[str, Any]:
        """Get information about the discovery system."""
        return {
            "discovery_paths": [str(path) for path in self._discovery_paths],
            "discovered_modules": sorted(self._discovered_modules.values()),
            "total_discovery_paths": len(self._discovery_paths),
            "total_discovered_modules": len(self._discovered_modules)
        }
