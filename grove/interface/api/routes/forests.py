"""Forest routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from grove.application.usecase.forest import (
    CreateForestRequest,
    CreateForestResponse,
    CreateForestUseCase,
    ListForestsRequest,
    ListForestsResponse,
    ListForestsUseCase,
)
from grove.domain.error import AlreadyExistsError
from grove.domain.model.forest import FOREST_NAME_PATTERN
from grove.interface.api.security import (
    guard,
    rate_limit,
    require_actor,
    sanitize_payload,
)
from grove.util.jwt import TokenPayload

router = APIRouter(prefix="/forests", tags=["forests"], route_class=DishkaRoute)


class CreateForestAPIRequest(BaseModel):
    """API request for creating a forest."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=2, max_length=100, pattern=FOREST_NAME_PATTERN)
    description: str | None = Field(default=None, max_length=1000)
    is_private: bool = Field(default=False, alias="isPrivate")

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        return v if v is None or v.strip() else None


@router.post(
    "",
    response_model=CreateForestResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=guard("posts"),
)
async def create_forest(
    request: CreateForestAPIRequest,
    create_forest_use_case: FromDishka[CreateForestUseCase],
    actor: TokenPayload = Depends(require_actor),
) -> CreateForestResponse:
    """Create a forest.

    Requires authentication. Forest names are unique.

    Args:
        request: Forest creation data
        create_forest_use_case: Create forest use case from DI
        actor: Authenticated user

    Returns:
        Created forest

    Raises:
        HTTPException: If the name is blank, invalid or taken
    """
    request = sanitize_payload(request)

    try:
        return await create_forest_use_case.execute(
            CreateForestRequest(
                creator_id=actor.user_id,
                creator_name=actor.name,
                name=request.name,
                description=request.description,
                is_private=request.is_private,
            )
        )
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValueError as e:
        logfire.warn("Forest creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get(
    "",
    response_model=ListForestsResponse,
    dependencies=[Depends(rate_limit("general"))],
)
async def list_forests(
    list_forests_use_case: FromDishka[ListForestsUseCase],
) -> ListForestsResponse:
    """List forests, most posts first and oldest first on ties."""
    return await list_forests_use_case.execute(ListForestsRequest())
