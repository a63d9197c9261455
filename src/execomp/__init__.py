"""execomp — executive compensation screener.

Finds executives at companies listed on an exchange whose total
compensation clears a multiple of their industry's benchmark.
"""

__version__ = "0.1.0"
