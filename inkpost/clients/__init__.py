"""
Outbound service clients.

Import directly from specific modules to avoid circular dependencies.
"""
