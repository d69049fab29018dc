from .message import RemindCommand, UwuifyCommand
from .user import BoopCommand, ProfileCommand

CONTEXT_COMMANDS = (
    BoopCommand,
    ProfileCommand,
    RemindCommand,
    UwuifyCommand,
)

__all__ = ["CONTEXT_COMMANDS", "BoopCommand", "ProfileCommand", "RemindCommand", "UwuifyCommand"]
