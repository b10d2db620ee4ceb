"""cukejson: Cucumber message stream to legacy JSON report formatter."""

__version__ = "0.1.0"
