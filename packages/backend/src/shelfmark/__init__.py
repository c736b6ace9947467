"""Shelfmark — personal bookmark manager backend.

Users sign up, sign in for a bearer token, and manage their own
bookmarks. Every bookmark read or write is gated by token verification
followed by an ownership check.
"""

__version__ = "0.1.0"
