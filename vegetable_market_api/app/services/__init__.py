"""
Service layer abstraction.

Each service encapsulates the store queries for a domain.  Services
receive an open connection from the caller and hold no state between
requests, so API handlers stay free of SQL.
"""
