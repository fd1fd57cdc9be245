"""Pytest configuration and shared fixtures."""

from hypothesis import settings

# Create a profile named "no_deadline" with deadline disabled.
#
# Pure-Python scalar multiplication is slow enough to trip the default deadline.
settings.register_profile("no_deadline", deadline=None, max_examples=25)
settings.load_profile("no_deadline")
