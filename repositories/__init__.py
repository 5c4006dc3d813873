"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific entity.
Repositories receive raw rows from the database and return DTOs.
Contracts live in interfaces.py; memory_repo.py holds the in-memory variants.
"""
