from .plugin import ContextMenusPlugin

PLUGIN_METADATA = {
    "name": "Context Menus",
    "version": "1.0.0",
    "author": "Bot Framework",
    "description": "Right-click commands for users (Boop!, View Profile Card) and messages (Remind Me Later, Uwuify Message)",
    "dependencies": [],
}


def setup(bot):
    return ContextMenusPlugin(bot)


__all__ = ["ContextMenusPlugin"]
