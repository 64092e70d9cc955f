# Repositories package init
"""
Endpoint Registry — Data Access Layer
=======================================

What:  Thin wrappers around an AsyncSession exposing the storage operations
       the services need, and nothing else.
Why:   Driver exceptions are translated into typed storage errors in exactly
       one place, so services match on StorageError /
       UniqueConstraintViolation instead of inspecting driver error codes.

Repository Inventory:
    - EndpointRepository: find_many, find_unique, create, update, delete
"""
