"""
Core modules for Revenue Tracker.

This package contains input parsing, the mutation gateway, revenue
metrics and the tracker facade built from them.
"""
