"""
SplitEasy - Source Package

Core of a personal bill-splitting tool: groups own bills and members,
and every screen watches a live, sortable view of stored records.

DESIGN PRINCIPLES:
1. Validate on load, on every edit, and once more before writing
2. Never write a record that fails a field check
3. One live subscription per list, cancelled before it is replaced
4. Storage layer is swappable
5. Failures become notifications, never crashes
"""

__version__ = "1.0.0"
__author__ = "SplitEasy Team"
