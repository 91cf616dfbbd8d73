"""
Project-wide constants.

This module contains all constants used across the codebase to avoid hardcoded values.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from typing import FrozenSet

# ============================================================================
# File Discovery
# ============================================================================

# Glob used when the CLI is invoked without one
DEFAULT_GLOB: str = "**/*.{cjs,js,jsx,mjs,ts,tsx}"

# Ignore file read from the working directory (gitignore syntax)
IGNORE_FILENAME: str = ".gitignore"

# Prefix of ignore-file lines that are comments
IGNORE_COMMENT_PREFIX: str = "#"

# ============================================================================
# Parsing
# ============================================================================

DIALECT_JSX: str = "jsx"
DIALECT_TYPESCRIPT: str = "typescript"

# Syntax extensions enabled for every parse unless overridden
DEFAULT_DIALECTS: FrozenSet[str] = frozenset({DIALECT_JSX, DIALECT_TYPESCRIPT})

# Files parsed with the plain TypeScript grammar (no JSX) when typescript is on
TYPESCRIPT_ONLY_SUFFIXES: FrozenSet[str] = frozenset({".ts", ".mts", ".cts"})

# ============================================================================
# Output
# ============================================================================

# Lines of context around a match in the code frame
LINES_ABOVE: int = 2
LINES_BELOW: int = 3

UNKNOWN_LOCATION_MESSAGE: str = "match with unknown location"

# ============================================================================
# Logging
# ============================================================================

DEFAULT_LOG_LEVEL: str = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ============================================================================
# Settings
# ============================================================================

ENV_PREFIX: str = "CODE_QUERY_"
