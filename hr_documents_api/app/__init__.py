"""
Application package initializer.

The project tracks the mandatory documents each employee of an
organisation has to hand in.  It is organised into layers so that no
single module grows into a monolith:

* ``core`` – configuration, logging, database bootstrap, errors.
* ``repositories`` – SQL for the four persisted tables.
* ``services`` – domain rules (uniqueness, link lifecycle, status).
* ``api/v1`` – FastAPI routers exposing the services over HTTP.
* ``schemas`` – Pydantic request/response models.
"""

from .main import app  # noqa: F401
