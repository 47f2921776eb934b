"""Core building blocks of the kiosk domain."""
