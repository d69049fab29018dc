"""Tests for plugin discovery and lifecycle."""

import sys
import textwrap
import types
from unittest.mock import AsyncMock, MagicMock

import pytest

from bot.core.plugin_loader import PluginLoader, PluginMetadata

PLUGIN_SOURCE = """
from bot.plugins.base import BasePlugin

PLUGIN_METADATA = {{
    "name": "{name}",
    "version": "2.0.0",
    "author": "Tests",
    "description": "A plugin written by the test suite",
    "dependencies": {dependencies!r},
}}


class {cls}(BasePlugin):
    pass
"""


def write_plugin(root, name, dependencies=(), with_setup=False, source=None):
    package = root / name
    package.mkdir()
    cls = f"{name.title()}Plugin"
    body = source or PLUGIN_SOURCE.format(name=name, cls=cls, dependencies=list(dependencies))
    if with_setup:
        body += f"\n\ndef setup(bot):\n    plugin = {cls}(bot)\n    plugin.from_setup = True\n    return plugin\n"
    (package / "__init__.py").write_text(textwrap.dedent(body))
    return package


@pytest.fixture
def plugin_dir(tmp_path):
    yield tmp_path
    for name in ("plugins.alpha", "plugins.beta"):
        sys.modules.pop(name, None)


@pytest.fixture
def loader(mock_bot, plugin_dir):
    loader = PluginLoader(mock_bot)
    loader.add_plugin_directory(plugin_dir)
    return loader


class TestPluginMetadata:
    def test_from_module(self):
        module = MagicMock(PLUGIN_METADATA={"name": "General", "dependencies": ("admin",)})

        metadata = PluginMetadata.from_module(module)

        assert metadata.name == "General"
        assert metadata.version == "1.0.0"
        assert metadata.dependencies == ["admin"]

    def test_module_without_metadata(self):
        module = types.ModuleType("plugins.bare")

        assert PluginMetadata.from_module(module).name == "plugins.bare"


class TestDiscovery:
    """Test finding plugin packages on disk."""

    def test_missing_directory_ignored(self, mock_bot, tmp_path):
        loader = PluginLoader(mock_bot)

        loader.add_plugin_directory(tmp_path / "nope")

        assert loader.plugin_directories == []

    def test_discovers_packages_only(self, loader, plugin_dir):
        write_plugin(plugin_dir, "beta")
        write_plugin(plugin_dir, "alpha")
        (plugin_dir / "_private").mkdir()
        (plugin_dir / "_private" / "__init__.py").write_text("")
        (plugin_dir / "notes").mkdir()
        (plugin_dir / "loose.py").write_text("")

        assert loader.discover_plugins() == ["alpha", "beta"]


class TestLifecycle:
    """Test loading and unloading plugins."""

    @pytest.mark.asyncio
    async def test_load_plugin(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha")

        assert await loader.load_plugin("alpha") is True

        plugin = loader.get_plugin("alpha")
        assert plugin.name == "alpha"
        assert loader.get_loaded_plugins() == ["alpha"]
        assert loader.get_plugin_info("alpha").version == "2.0.0"

    @pytest.mark.asyncio
    async def test_setup_preferred(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha", with_setup=True)

        await loader.load_plugin("alpha")

        assert loader.get_plugin("alpha").from_setup is True

    @pytest.mark.asyncio
    async def test_loading_twice_is_noop(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha")
        await loader.load_plugin("alpha")
        first = loader.get_plugin("alpha")

        assert await loader.load_plugin("alpha") is True
        assert loader.get_plugin("alpha") is first

    @pytest.mark.asyncio
    async def test_unknown_plugin(self, loader):
        assert await loader.load_plugin("ghost") is False

    @pytest.mark.asyncio
    async def test_missing_dependency(self, loader, plugin_dir):
        write_plugin(plugin_dir, "beta", dependencies=["alpha"])

        assert await loader.load_plugin("beta") is False
        assert loader.get_loaded_plugins() == []

    @pytest.mark.asyncio
    async def test_dependency_satisfied(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha")
        write_plugin(plugin_dir, "beta", dependencies=["alpha"])

        await loader.load_all_plugins(["alpha", "beta"])

        assert loader.get_loaded_plugins() == ["alpha", "beta"]

    @pytest.mark.asyncio
    async def test_broken_module_not_left_in_sys_modules(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha", source="raise RuntimeError('broken plugin')\n")

        assert await loader.load_plugin("alpha") is False
        assert "plugins.alpha" not in sys.modules

    @pytest.mark.asyncio
    async def test_module_without_plugin_class(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha", source="VALUE = 1\n")

        assert await loader.load_plugin("alpha") is False

    @pytest.mark.asyncio
    async def test_unload_plugin(self, loader, plugin_dir):
        write_plugin(plugin_dir, "alpha")
        await loader.load_plugin("alpha")

        assert await loader.unload_plugin("alpha") is True

        assert loader.get_plugin("alpha") is None
        assert loader.get_plugin_info("alpha") is None
        assert "plugins.alpha" not in sys.modules

    @pytest.mark.asyncio
    async def test_unload_unknown(self, loader):
        assert await loader.unload_plugin("ghost") is False

    @pytest.mark.asyncio
    async def test_unload_failure_keeps_plugin(self, loader):
        plugin = MagicMock()
        plugin.on_unload = AsyncMock(side_effect=RuntimeError("stuck"))
        loader.plugins["stuck"] = plugin

        assert await loader.unload_plugin("stuck") is False
        assert loader.get_plugin("stuck") is plugin

    @pytest.mark.asyncio
    async def test_unload_all_in_reverse(self, loader):
        order = []
        for name in ("first", "second"):
            plugin = MagicMock()
            plugin.on_unload = AsyncMock(side_effect=lambda name=name: order.append(name))
            loader.plugins[name] = plugin

        await loader.unload_all_plugins()

        assert order == ["second", "first"]
        assert loader.plugins == {}
