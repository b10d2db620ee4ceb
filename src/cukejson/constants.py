"""Constants for cukejson."""

DEFAULT_CONFIG_FILE = ".cukejson.toml"
DEFAULT_INDENT = 2

# Element types in the report
ELEMENT_BACKGROUND = "background"
ELEMENT_SCENARIO = "scenario"

# CLI exit codes
EXIT_INPUT_ERROR = 1
EXIT_MISSING_REFERENCE = 2
EXIT_CONFIG_ERROR = 3
