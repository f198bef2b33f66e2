"""
Service layer abstraction.

Each service encapsulates business logic for a domain and raises the
errors defined in ``core.errors``.  API handlers only call services.
"""
