"""Minimal xapi XML-RPC client: one call per session, rendered as JSON"""

__version__ = "0.2.0"
