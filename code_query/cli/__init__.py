"""
Command-line interface for code query.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""
