"""
Git OAuth Broker.

Server-side OAuth 2.0 authorization-code exchange for browser-based
Git content editors (GitHub, GitLab).
"""

__version__ = "0.1.0"
