# Services package init
"""
Endpoint Registry — Services Layer
====================================

What:  Business logic between routes (HTTP) and repositories (persistence).
How:   Services take the request's AsyncSession, apply validation and
       existence checks, and translate storage errors into HTTP-facing ones.

Service Inventory:
    - EndpointService: list / create / get / update / delete of API endpoint records
"""
