"""Static configuration values for the interactions plugin."""

AUTOCOMPLETE_OPTIONS = ("Option1", "Option2", "Option3", "Option4", "Option5")

# Discord caps autocomplete responses at 25 choices
MAX_AUTOCOMPLETE_CHOICES = 25
# ...and select option labels at 100 characters
MAX_OPTION_LABEL = 100

ECHO_MODAL_TITLE = "Confirmation"
ECHO_EMPTY_TEXT = "No text was submitted."

VIEW_TIMEOUT = 120
