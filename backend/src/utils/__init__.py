"""
Utility modules for the clinic records backend.

This package contains shared helpers used across the application,
including record field validators and identifier checks.
"""
