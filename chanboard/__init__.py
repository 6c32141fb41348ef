"""chanboard — channel onboarding toolkit for messaging assistants."""

__version__ = "0.3.0"
