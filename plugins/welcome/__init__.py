from .plugin import WelcomePlugin

PLUGIN_METADATA = {
    "name": "Welcome",
    "version": "1.0.0",
    "author": "Bot Framework",
    "description": "Sends new members a direct message when they join",
    "dependencies": [],
}


def setup(bot):
    return WelcomePlugin(bot)


__all__ = ["WelcomePlugin"]
