"""
Infrastructure Package
======================

Abstraction layers for external dependencies of the Campus Mart backend.

Modules:
    - storage: File storage abstraction (local filesystem)
    - container: Service locator wiring storage and domain services together
"""
