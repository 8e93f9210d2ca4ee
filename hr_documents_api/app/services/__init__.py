"""
Service layer.

Each service owns the rules for one part of the domain and opens its
own transaction through ``core.db.get_cursor``; routers never touch the
database directly.
"""
