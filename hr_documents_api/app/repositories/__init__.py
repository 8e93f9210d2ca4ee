"""
SQL access for the four persisted entities.

Repository methods receive an open cursor from ``core.db.get_cursor`` so
the calling service decides where a transaction starts and ends.  They
return plain dictionaries; conversion to Pydantic models happens in the
services.
"""
