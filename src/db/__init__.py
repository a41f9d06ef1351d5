"""
Database Module
-------------
Handles database connections, ORM models, and database operations.
Uses SQLAlchemy for the accounts, bootcamps and reviews tables and exposes
a small repository with single-statement update and delete primitives.
"""
