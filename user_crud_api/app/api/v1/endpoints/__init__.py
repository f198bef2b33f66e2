"""
Endpoint subpackage for API v1.

Each module defines an APIRouter for one resource.  Resource routers
are aggregated in ``router.py`` one level up; ``info`` is mounted at
the application root by ``main.create_app``.
"""
