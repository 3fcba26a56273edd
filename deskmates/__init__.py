"""Desktop mascot manager core: geometry, roster, placement, settings, sounds and a command-line API client."""

__version__ = "0.1.0"