"""
Application package initializer.

The project is split by concern: ``core`` holds configuration, the
record store, logging and security primitives; ``services`` hold the
queries for each domain (taxonomy, search, accounts, admin items);
``schemas`` define request and response bodies; ``api`` binds them to
HTTP routes.

The ASGI application itself lives in ``main`` and is not imported here,
so that importing a service or schema does not read process
configuration.
"""
