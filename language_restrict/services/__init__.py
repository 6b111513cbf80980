"""
Language restricted selection services.

Contains service classes for languages, users, entity queries and
selection handlers.
"""
