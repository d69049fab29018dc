from .channel import setup_channel_commands

__all__ = ["setup_channel_commands"]
