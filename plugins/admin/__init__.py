from .plugin import AdminPlugin

PLUGIN_METADATA = {
    "name": "Admin",
    "version": "1.0.0",
    "author": "Bot Framework",
    "description": "Administrator-only channel tools: bulk delete and speaking through the bot",
    "dependencies": [],
}


def setup(bot):
    return AdminPlugin(bot)


__all__ = ["AdminPlugin"]
