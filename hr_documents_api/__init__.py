"""
Top‑level package for the HR Documents API.

This file makes ``hr_documents_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``hr_documents_api.app.main``.  Tests import the application through
this package, so the marker file must stay in place even though it
exports nothing itself.

All functionality lives in submodules under ``app``.
"""

__all__ = []
