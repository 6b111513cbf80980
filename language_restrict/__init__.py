"""
Entity reference selection with language restriction.

Application package: services, pipelines, schemas, middleware and routers
for reference fields whose referenceable entities are filtered by language.
"""

__version__ = "1.0.0"
