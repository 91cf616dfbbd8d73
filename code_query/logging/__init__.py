"""
Unified logging package: format with importance (0-10) for project log output.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

from code_query.logging.unified_logging import (
    LEVEL_TO_IMPORTANCE,
    PACKAGE_LOGGER_NAME,
    UNIFIED_DATE_FMT,
    UNIFIED_FORMAT_STR,
    UnifiedFormatter,
    create_unified_formatter,
    importance_from_level,
    setup_logging,
)

__all__ = [
    "LEVEL_TO_IMPORTANCE",
    "PACKAGE_LOGGER_NAME",
    "UNIFIED_DATE_FMT",
    "UNIFIED_FORMAT_STR",
    "UnifiedFormatter",
    "create_unified_formatter",
    "importance_from_level",
    "setup_logging",
]
