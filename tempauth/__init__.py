"""
tempauth - Temporary SSH second-factor exemption with guaranteed revert.

Grants one account a short, address-scoped window in which it may log in
with its password only, then puts the second factor back:
- when the account is seen opening a session,
- when the window runs out,
- or, if this process dies, when the scheduled failsafe job fires.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
