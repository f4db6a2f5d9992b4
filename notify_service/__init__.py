"""notify-service: notification dispatch engine (in-app, email, SMS)."""

__version__ = "0.1.0"
