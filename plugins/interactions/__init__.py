from .plugin import InteractionsPlugin

PLUGIN_METADATA = {
    "name": "Interactions",
    "version": "1.0.0",
    "author": "Bot Framework",
    "description": "Slash-only examples of modals, autocomplete and select menus",
    "dependencies": [],
}


def setup(bot):
    return InteractionsPlugin(bot)


__all__ = ["InteractionsPlugin"]
