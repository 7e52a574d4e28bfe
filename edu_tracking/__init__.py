"""
Private tutoring tracker.

Student profiles, per-session attendance and evaluation records, and
the monthly statistics derived from them.
"""

__version__ = "0.1.0"
