"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "Europe/Rome"
DEFAULT_AUTO_CLOSE_TIME = "18:00"
DEFAULT_AUTO_CLOSE_ENABLED = True
DEFAULT_SWEEP_INTERVAL_SECONDS = 5 * 60
DEFAULT_IMAGE_URL = "/placeholder.svg"
HOURS_PRECISION = 2
ADMIN_EDIT_NOTE = "Modificato dall'amministratore"
