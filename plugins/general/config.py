"""Static configuration values for the general plugin."""

from hikari import Color

INFO_COLOR = Color(0x3498DB)
HELP_COLOR = Color(0x2ECC71)

DATE_FORMAT = "%m/%d/%Y"
NO_DESCRIPTION = "No description available."

# Seconds before the ping button stops responding
BUTTON_TIMEOUT = 120
