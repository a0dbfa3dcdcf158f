"""
API package containing the HTTP routes.

``router`` aggregates the domain routers mounted under ``/api``;
``endpoints.health`` is mounted separately at the application root.
"""
