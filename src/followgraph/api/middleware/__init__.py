"""API middleware package.

Cross-cutting concerns (auth, request ids, timing, errors) live here so
routers stay focused on the connections API.
"""
