"""chunkhint - resource hints for bundled HTML outputs."""

__version__ = "0.1.0"
