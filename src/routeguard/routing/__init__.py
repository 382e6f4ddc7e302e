"""Routing — path patterns, the contract registry, and file discovery.

Contracts and endpoints are registered during startup and frozen into
an immutable, concurrently readable table before serving.
"""
