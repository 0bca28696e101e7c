"""
Infrastructure layer - External integrations.

This layer contains integrations with external frameworks and tools.
It depends on both Application and Domain layers. Submodules are imported
explicitly so the FastAPI integration stays an optional extra:

    from glue_di.infrastructure.fastapi_integration import ScopedContainerMiddleware
    from glue_di.infrastructure.testing import TestContainer
"""
