"""Loading transformer plugins.

Plugins contribute transformers through the ``register_transformers``
hook and come from two places:

* installed distributions, through the ``sanitize.plugins`` entry-point
  group (the entry point names a module or a plugin instance);
* single-file modules in the project's local plugin directory
  (``.sanitize/plugins/`` by default)::

      # .sanitize/plugins/slug.py
      from sanitize.plugins.hookspecs import hookimpl

      @hookimpl
      def register_transformers():
          return {"slug": slugify}

A plugin that fails to import or to contribute is logged and skipped.
The remaining rules keep working.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

import pluggy

from sanitize.plugins.hookspecs import SanitizeHookSpec

if TYPE_CHECKING:
    from sanitize.transformers.registry import TransformerRegistry

PROJECT_NAME = "sanitize"
ENTRY_POINT_GROUP = "sanitize.plugins"
LOCAL_PREFIX = "local:"

logger = logging.getLogger(__name__)


class PluginManager:
    """Discovers plugins and collects their transformers into a registry."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SanitizeHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Register entry-point plugins, then local plugins from *local_dir*.

        Returns the names of all registered plugins. Local plugins are
        named ``local:<file stem>``.
        """
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.debug("Loaded %d plugin(s) from entry points %s", count, ENTRY_POINT_GROUP)
        if local_dir is not None:
            for path in _local_plugin_files(local_dir):
                self._load_local(path)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin module or instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def load_transformers(self, registry: TransformerRegistry) -> list[str]:
        """Register every plugin-contributed transformer on *registry*.

        Plugins are consulted in registration order, so a later plugin
        overrides an earlier one (and any built-in) on a name collision.
        A plugin that raises or returns something other than a dict is
        skipped with a warning.

        Returns the rule names that were registered.
        """
        registered: list[str] = []
        for impl in self._pm.hook.register_transformers.get_hookimpls():
            try:
                contributed = impl.function()
            except Exception:
                logger.warning(
                    "Failed to collect transformers from plugin %s",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue

            if contributed is None:
                continue
            if not isinstance(contributed, dict):
                logger.warning(
                    "Plugin %s returned non-dict transformer registrations",
                    impl.plugin_name,
                )
                continue

            for rule_name, transformer in contributed.items():
                if not isinstance(rule_name, str) or not callable(transformer):
                    logger.warning(
                        "Skipping transformer registration %r from plugin %s",
                        rule_name,
                        impl.plugin_name,
                    )
                    continue
                registry.register(rule_name, transformer)
                registered.append(rule_name)
        return registered

    def _load_local(self, path: Path) -> None:
        try:
            module = _import_file(path)
        except Exception:
            logger.warning("Failed to import local plugin %s", path, exc_info=True)
            return
        if not _declares_hook(module):
            logger.debug("Local plugin %s has no register_transformers hook", path)
            return
        self.register_plugin(module, name=f"{LOCAL_PREFIX}{path.stem}")


def _local_plugin_files(local_dir: Path) -> list[Path]:
    """``*.py`` files in *local_dir*, sorted; ``_``-prefixed files are helpers."""
    if not local_dir.is_dir():
        return []
    return sorted(p for p in local_dir.glob("*.py") if not p.name.startswith("_"))


def _import_file(path: Path) -> ModuleType:
    module_name = f"_sanitize_local_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"cannot build an import spec for {path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        raise
    return module


def _declares_hook(module: ModuleType) -> bool:
    hook = getattr(module, "register_transformers", None)
    return callable(hook) and getattr(hook, f"{PROJECT_NAME}_impl", None) is not None
