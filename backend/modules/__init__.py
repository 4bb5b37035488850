"""
Feature modules for the Services Hub backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

``tokens`` is the exception: a pure codec with no service. HTTP routes live
in ``api.routes``. Modules communicate through interfaces, not concrete
implementations.
"""
