from .plugin import GeneralPlugin

PLUGIN_METADATA = {
    "name": "General",
    "version": "1.0.0",
    "author": "Bot Framework",
    "description": "Everyday commands: latency check, user info and the command list",
    "dependencies": [],
}


def setup(bot):
    return GeneralPlugin(bot)


__all__ = ["GeneralPlugin"]
