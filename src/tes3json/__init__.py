"""Convert TES3 plugins to JSON and back, with optional 1C text rewriting."""

__version__ = "0.2.0"
