# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services import PlaceService, ServiceContext, UserService


def get_context(request: Request) -> ServiceContext:
    """
    Get the service context started by the application lifespan.
    """
    return request.app.state.context


def get_place_service(context: ServiceContext = Depends(get_context)) -> PlaceService:
    return PlaceService(context)


def get_user_service(context: ServiceContext = Depends(get_context)) -> UserService:
    return UserService(context)


# Type aliases for dependency injection
ContextDep = Annotated[ServiceContext, Depends(get_context)]
PlaceServiceDep = Annotated[PlaceService, Depends(get_place_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
