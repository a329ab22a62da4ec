"""Dependencies that are used in the API endpoints."""

import uuid
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, get_type_hints

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from lorekeeper.api.context import ApiContext
from lorekeeper.core import container as container_mod
from lorekeeper.core.access_control import Caller
from lorekeeper.core.config import settings
from lorekeeper.core.container import Container
from lorekeeper.core.exceptions import ValidationException
from lorekeeper.core.logging import ContextualLogger, logger
from lorekeeper.core.protocols import TokenVerifier
from lorekeeper.core.shared_models import AuthMethod, UserRole
from lorekeeper.db.session import get_db
from lorekeeper.schemas.pagination import ListQuery

__all__ = [
    "Inject",
    "get_container",
    "get_context",
    "get_db",
    "get_list_query",
    "get_logger",
    "list_filters",
]

ModelT = TypeVar("ModelT", bound=BaseModel)

bearer_scheme = HTTPBearer(auto_error=False, description="Token issued by the identity provider")


def _authenticate_system_user() -> Tuple[Optional[Caller], AuthMethod, dict]:
    """Authenticate the configured superuser when auth is disabled."""
    if settings.FIRST_SUPERUSER is None:
        return None, AuthMethod.SYSTEM, {}
    caller = Caller(id=settings.FIRST_SUPERUSER, role=UserRole.ADMIN)
    return caller, AuthMethod.SYSTEM, {"disabled_auth": True}


def _authenticate_token(
    token: str, verifier: TokenVerifier
) -> Tuple[Optional[Caller], AuthMethod, dict]:
    """Authenticate a bearer token.

    Raises:
    ------
        UnauthorizedException: If the token cannot be verified.
    """
    caller = verifier.verify(token)
    return caller, AuthMethod.TOKEN, {}


# ---------------------------------------------------------------------------
# DI Container
# ---------------------------------------------------------------------------


def get_container() -> Container:
    """Get the DI container. Initialized at startup."""
    c = container_mod.container
    if c is None:
        raise RuntimeError("Container not initialized. Call initialize_container() first.")
    return c


# ---------------------------------------------------------------------------
# Protocol Injection
# ---------------------------------------------------------------------------

# Cache of protocol_type → Container field name, built once at first call.
_INJECT_CACHE: dict[type, str] = {}


def _resolve_field_name(protocol_type: type) -> str:
    """Find which Container field matches the given protocol type.

    Uses get_type_hints() to introspect the Container dataclass.
    Result is cached so the lookup happens at most once per protocol type.
    """
    if not _INJECT_CACHE:
        for name, hint in get_type_hints(Container).items():
            _INJECT_CACHE[hint] = name

    field_name = _INJECT_CACHE.get(protocol_type)
    if field_name is None:
        available = list(_INJECT_CACHE.values())
        raise TypeError(
            f"No binding for {protocol_type.__name__} in Container. Available fields: {available}"
        )
    return field_name


def Inject(protocol_type: type):  # noqa: N802 - uppercase to match FastAPI convention
    """Resolve a protocol implementation from the DI container.

    Works like ``Depends()`` but looks up the implementation by protocol type
    instead of requiring the caller to know about the Container internals.

    Usage in FastAPI endpoints::

        from lorekeeper.api.deps import Inject
        from lorekeeper.domains.tags.protocols import TagServiceProtocol


        @router.get("/{id}")
        async def read(id: UUID, tags: TagServiceProtocol = Inject(TagServiceProtocol)):
            ...
    """
    field_name = _resolve_field_name(protocol_type)

    def _resolve(c: Container = Depends(get_container)):
        return getattr(c, field_name)

    return Depends(_resolve)


# ---------------------------------------------------------------------------
# Request context
# ---------------------------------------------------------------------------


async def get_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    c: Container = Depends(get_container),
) -> ApiContext:
    """Create the API context for the request.

    This is the primary dependency for all API endpoints, providing:
    - Request tracking (request_id)
    - The caller identity (or None for anonymous requests)
    - Pre-configured contextual logger

    Args:
    ----
        request (Request): The FastAPI request object.
        credentials (HTTPAuthorizationCredentials, optional): Bearer token, if any.
        c (Container): The DI container holding the token verifier.

    Returns:
    -------
        ApiContext: API context with the caller and logger.

    Raises:
    ------
        UnauthorizedException: If a bearer token is present but invalid.
    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))

    caller: Optional[Caller] = None
    auth_method = AuthMethod.ANONYMOUS
    auth_metadata: Dict[str, Any] = {}

    if not settings.AUTH_ENABLED:
        caller, auth_method, auth_metadata = _authenticate_system_user()
    elif credentials is not None:
        caller, auth_method, auth_metadata = _authenticate_token(
            credentials.credentials, c.token_verifier
        )

    base_logger = logger.with_context(
        request_id=request_id,
        auth_method=auth_method.value,
        context_base="api",
    )
    if caller:
        base_logger = base_logger.with_context(
            caller_id=str(caller.id), caller_role=caller.role.value
        )

    ctx = ApiContext(
        caller=caller,
        request_id=request_id,
        auth_method=auth_method,
        auth_metadata=auth_metadata,
        logger=base_logger,
    )

    request.state.api_context = ctx
    return ctx


async def get_logger(
    context: ApiContext = Depends(get_context),
) -> ContextualLogger:
    """Get a logger with the current request context."""
    return context.logger


# ---------------------------------------------------------------------------
# List query parameters
# ---------------------------------------------------------------------------


def _validate_query(model: Type[ModelT], values: Dict[str, Any]) -> ModelT:
    """Validate query parameters into a model.

    Query strings are caller input like any other, so schema violations are
    reported as VALIDATION_ERROR (400) rather than a FastAPI 422.
    """
    try:
        return model.model_validate(values)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(loc) for loc in error["loc"]) or "query"
        raise ValidationException(f"Invalid query parameter '{field}': {error['msg']}") from e


async def get_list_query(
    search: Optional[str] = Query(None, description="Case-insensitive substring filter"),
    visibility: Optional[str] = Query(None, description="PUBLIC, PRIVATE or HIDDEN"),
    owner_id: Optional[str] = Query(None, alias="ownerId", description="Owner user id"),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", description="createdAt, updatedAt, name or a resource field"
    ),
    sort_dir: Optional[str] = Query(None, alias="sortDir", description="asc or desc"),
    limit: Optional[int] = Query(None, description="Page size"),
    cursor: Optional[str] = Query(None, description="Opaque cursor from a previous page"),
) -> ListQuery:
    """Collect the shared list parameters into a ListQuery."""
    raw = {
        "search": search,
        "visibility": visibility.upper() if visibility else None,
        "ownerId": owner_id,
        "sortBy": sort_by,
        "sortDir": sort_dir.lower() if sort_dir else None,
        "limit": limit,
        "cursor": cursor,
    }
    return _validate_query(ListQuery, {k: v for k, v in raw.items() if v is not None})


def list_filters(model: Type[ModelT]) -> Callable[[Request], ModelT]:
    """Dependency reading a resource's filter model from the query string.

    Only parameters named after a field alias of ``model`` are considered, so
    the shared list parameters pass through untouched.
    """
    aliases = {field.alias or name for name, field in model.model_fields.items()}

    async def _dependency(request: Request) -> ModelT:
        values = {k: v for k, v in request.query_params.items() if k in aliases}
        return _validate_query(model, values)

    return _dependency
