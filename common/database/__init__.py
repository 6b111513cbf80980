"""
Database module - Generic async MongoDB connection using Motor.

Usage:
    from common.database import MongoDB

    main_db = MongoDB()
    await main_db.connect(uri, database_name)
    collection = main_db.db["referencefields"]
"""

from common.database.mongodb import MongoDB

__all__ = [
    "MongoDB",
]
