"""Top-level package for Django configuration.

This package exposes application configuration for the room booking
backend. It contains settings modules for different environments and entry
points for WSGI and ASGI.
"""
