"""Adapters connecting autoroute to host web frameworks."""
