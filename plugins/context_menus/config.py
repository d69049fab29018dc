"""Static configuration values for the context menu plugin."""

from hikari import Color

BOOP_COLOR = Color(0x9B59B6)
PROFILE_COLOR = Color(0x3498DB)
REMINDER_COLOR = Color(0x2ECC71)
UWU_COLOR = Color(0xE91E63)

PROFILE_DATE_FORMAT = "%b %d, %Y"
PREVIEW_LENGTH = 100

UWU_ENDINGS = (" uwu", " owo", " >w<", " :3", " nyaa~")

# Applied in order
UWU_REPLACEMENTS = (
    ("r", "w"),
    ("l", "w"),
    ("R", "W"),
    ("L", "W"),
    ("na", "nya"),
    ("Na", "Nya"),
    ("NA", "NYA"),
    ("the", "da"),
    ("The", "Da"),
)
