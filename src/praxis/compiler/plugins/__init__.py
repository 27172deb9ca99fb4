"""
Output plugin registry.

Plugins are looked up by name from a fixed registry. An unknown name is
a configuration error raised before anything is compiled, listing the
names that are available.

Examples:
    >>> plugins = resolve_plugins(["claude-code"], PluginOptions(root=Path(".")))
    >>> [p.name for p in plugins]
    ['claude-code']
    >>> resolve_plugins(["vscode"], PluginOptions(root=Path(".")))
    Traceback (most recent call last):
    ...
    praxis.core.errors.UnknownPluginError: Unknown plugin: "vscode". Available plugins: claude-code
"""

from __future__ import annotations

from typing import Callable

from praxis.compiler.plugins.base import CompilerPlugin, PluginOptions
from praxis.compiler.plugins.claude_code import ClaudeCodePlugin
from praxis.core.errors import UnknownPluginError

PluginFactory = Callable[[PluginOptions], CompilerPlugin]

PLUGINS: dict[str, PluginFactory] = {
    ClaudeCodePlugin.name: ClaudeCodePlugin,
}


def available_plugins() -> list[str]:
    """Registered plugin names, sorted."""
    return sorted(PLUGINS)


def resolve_plugins(names: list[str], options: PluginOptions) -> list[CompilerPlugin]:
    """Instantiate the plugins named in *names*, in order.

    Raises:
        UnknownPluginError: a name is not registered.
    """
    plugins: list[CompilerPlugin] = []
    for name in names:
        factory = PLUGINS.get(name)
        if factory is None:
            raise UnknownPluginError(name, available_plugins())
        plugins.append(factory(options))
    return plugins


__all__ = [
    "PLUGINS",
    "ClaudeCodePlugin",
    "CompilerPlugin",
    "PluginOptions",
    "available_plugins",
    "resolve_plugins",
]
