"""Protocol components of the stealth address library."""
