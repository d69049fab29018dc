import importlib.util
import inspect
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..plugins.base import BasePlugin

logger = logging.getLogger(__name__)


@dataclass
class PluginMetadata:
    name: str
    version: str = "1.0.0"
    author: str = "Unknown"
    description: str = ""
    dependencies: list[str] = field(default_factory=list)

    @classmethod
    def from_module(cls, module: Any) -> "PluginMetadata":
        meta = getattr(module, "PLUGIN_METADATA", None)
        if not meta:
            return cls(name=module.__name__)
        return cls(
            name=meta.get("name", "Unknown"),
            version=meta.get("version", "1.0.0"),
            author=meta.get("author", "Unknown"),
            description=meta.get("description", ""),
            dependencies=list(meta.get("dependencies", [])),
        )


class PluginLoader:
    """Discovers plugin packages on disk and manages their lifecycle.

    A plugin is a directory holding an ``__init__.py`` that exposes either a
    ``setup(bot)`` factory or a :class:`BasePlugin` subclass, plus an optional
    ``PLUGIN_METADATA`` mapping.
    """

    def __init__(self, bot: Any) -> None:
        self.bot = bot
        self.plugins: dict[str, BasePlugin] = {}
        self.plugin_metadata: dict[str, PluginMetadata] = {}
        self.plugin_directories: list[Path] = []

    def add_plugin_directory(self, directory: str | Path) -> None:
        path = Path(directory)
        if path.is_dir():
            self.plugin_directories.append(path)
            logger.info(f"Added plugin directory: {path}")
        else:
            logger.warning(f"Plugin directory does not exist: {path}")

    def discover_plugins(self) -> list[str]:
        discovered = [
            plugin_path.name
            for directory in self.plugin_directories
            for plugin_path in sorted(directory.iterdir())
            if plugin_path.is_dir() and not plugin_path.name.startswith("_") and (plugin_path / "__init__.py").exists()
        ]
        logger.info(f"Discovered plugins: {discovered}")
        return discovered

    def _load_plugin_module(self, plugin_name: str) -> Any:
        module_name = f"plugins.{plugin_name}"
        for directory in self.plugin_directories:
            init_file = directory / plugin_name / "__init__.py"
            if not init_file.exists():
                continue

            spec = importlib.util.spec_from_file_location(module_name, init_file)
            if spec and spec.loader:
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                try:
                    spec.loader.exec_module(module)
                except Exception:
                    sys.modules.pop(module_name, None)
                    raise
                return module

        raise ImportError(f"Plugin {plugin_name} not found")

    def _create_plugin(self, module: Any) -> BasePlugin:
        if hasattr(module, "setup"):
            return module.setup(self.bot)

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, BasePlugin) and obj is not BasePlugin and obj.__module__.startswith(module.__name__):
                return obj(self.bot)

        raise ValueError(f"No plugin class found in module {module.__name__}")

    async def load_plugin(self, plugin_name: str) -> bool:
        if plugin_name in self.plugins:
            logger.info(f"Plugin {plugin_name} is already loaded")
            return True

        try:
            module = self._load_plugin_module(plugin_name)
            metadata = PluginMetadata.from_module(module)

            missing = [dep for dep in metadata.dependencies if dep not in self.plugins]
            if missing:
                logger.error(f"Plugin {plugin_name} requires {', '.join(missing)} which is not loaded")
                return False

            plugin = self._create_plugin(module)
            await plugin.on_load()
        except Exception as e:
            logger.error(f"Failed to load plugin {plugin_name}: {e}", exc_info=True)
            return False

        self.plugins[plugin_name] = plugin
        self.plugin_metadata[plugin_name] = metadata
        logger.info(f"Successfully loaded plugin: {plugin_name} v{metadata.version}")
        return True

    async def unload_plugin(self, plugin_name: str) -> bool:
        plugin = self.plugins.get(plugin_name)
        if plugin is None:
            logger.warning(f"Plugin {plugin_name} is not loaded")
            return False

        try:
            await plugin.on_unload()
        except Exception as e:
            logger.error(f"Failed to unload plugin {plugin_name}: {e}")
            return False

        del self.plugins[plugin_name]
        self.plugin_metadata.pop(plugin_name, None)

        # Drop the package and its submodules so a later load re-imports them
        prefix = f"plugins.{plugin_name}"
        for module_name in [name for name in sys.modules if name == prefix or name.startswith(prefix + ".")]:
            del sys.modules[module_name]

        logger.info(f"Successfully unloaded plugin: {plugin_name}")
        return True

    async def load_all_plugins(self, enabled_plugins: list[str]) -> None:
        for plugin_name in enabled_plugins:
            await self.load_plugin(plugin_name)

    async def unload_all_plugins(self) -> None:
        # Reverse order so dependents go before their dependencies
        for plugin_name in reversed(list(self.plugins)):
            await self.unload_plugin(plugin_name)

    def get_plugin(self, plugin_name: str) -> BasePlugin | None:
        return self.plugins.get(plugin_name)

    def get_loaded_plugins(self) -> list[str]:
        return list(self.plugins.keys())

    def get_plugin_info(self, plugin_name: str) -> PluginMetadata | None:
        return self.plugin_metadata.get(plugin_name)
