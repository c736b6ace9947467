"""Authentication.

Users sign in with email/password and receive a short-lived JWT.
Every protected route resolves the Bearer token into a CurrentIdentity
that is passed explicitly into the service layer for ownership checks.
"""
