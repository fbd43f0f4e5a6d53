"""Number library with SMS verification code polling: records, settings, import, fetching and a command line."""

__version__ = "1.0.0"