"""tipjar - occasional, rule-driven tips for command line tools."""

__version__ = "0.3.0"
