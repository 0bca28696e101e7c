from typing import Awaitable, Callable, Type, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from glue_di.domain import IContainer, ScopeError

T = TypeVar("T")


def create_fastapi_dependency(container: IContainer, dependency_type: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that resolves from the DI container.

    The resolved instance follows the binding registered in the container:
    a singleton binding yields the same instance to every request, a
    transient binding a new one per call.

    Args:
        container: The DI container to resolve dependencies from.
        dependency_type: The type to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = DIContainer()
        >>> container.register(IUserRepository, SqlUserRepository, singleton=True)
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, IUserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: IUserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> T:
        return container.resolve(dependency_type)

    return dependency


def create_scoped_dependency(dependency_type: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency that resolves from the request's scoped container.

    Requires the ScopedContainerMiddleware to be installed.

    Args:
        dependency_type: The type to resolve from the scoped container.

    Returns:
        A callable that resolves from the request-scoped container.

    Raises:
        ScopeError: When called for a request without a scoped container.

    Example:
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
        >>>
        >>> get_handler = create_scoped_dependency(IRequestHandler)
        >>>
        >>> @app.get("/process")
        >>> async def process_request(handler: IRequestHandler = Depends(get_handler)):
        ...     return handler.handle()
    """

    def scoped_dependency(request: Request) -> T:
        if not hasattr(request.state, "di_container"):
            raise ScopeError(
                "Request does not have a scoped DI container. Did you forget to add ScopedContainerMiddleware?"
            )
        scoped_container: IContainer = request.state.di_container
        return scoped_container.resolve(dependency_type)

    return scoped_dependency


class ScopedContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that creates a scoped DI container for each request.

    The scoped container is accessible via `request.state.di_container` and
    shares the parent's bindings and singletons. Registrations made on it, such
    as per-request instances, are dropped when the request ends.

    Attributes:
        container: The parent DI container to create scopes from.

    Example:
        >>> container = DIContainer()
        >>> container.register(IDatabase, PostgresDatabase, singleton=True)
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a parent container.

        Args:
            app: The FastAPI/Starlette application.
            container: The parent DI container to create scopes from.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach a scoped container to the request and execute the endpoint."""
        scoped_container = self.container.create_scope()
        request.state.di_container = scoped_container

        try:
            response = await call_next(request)
            return response
        finally:
            scoped_container.clear()
