"""Release metadata clients for npm, GitHub and go.dev, changelog parsing and per-source capping."""

__version__ = "0.1.0"