from .bot import DiscordBot
from .cooldowns import CooldownGate
from .event_system import EventSystem
from .plugin_loader import PluginLoader

__all__ = ["DiscordBot", "PluginLoader", "EventSystem", "CooldownGate"]
