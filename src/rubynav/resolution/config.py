"""
Configuration for definition resolution.

Defines candidate limits, scope conventions and load-statement settings.
"""

# Calls whose receiver type is unknown match every same-named method; cap them
MAX_DEFINITION_CANDIDATES_WITHOUT_RECEIVER = 10

# Separator used to join lexical nesting into a qualified namespace name
SCOPE_SEPARATOR = "::"

# Suffix implied by require_relative literals
RUBY_FILE_SUFFIX = ".rb"

# Position emitted for whole-file targets (require / require_relative)
FILE_START = (0, 0)
