"""
Secure RESTful API with content-bound bearer tokens.

Mutating post requests must carry a token obtained from /auth/sign-content
for the exact body being submitted.
"""

from webapi.app import create_app

__all__ = ["create_app"]
