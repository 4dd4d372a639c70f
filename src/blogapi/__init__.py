"""BlogAPI — multi-user blog service.

Users register and log in with email/password, receive a signed JWT,
and create or list their own tagged posts.
"""

__version__ = "0.1.0"
