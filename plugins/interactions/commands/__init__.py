from .demo import setup_demo_commands

__all__ = ["setup_demo_commands"]
