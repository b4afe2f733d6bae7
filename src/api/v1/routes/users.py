"""User profile API routes."""

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser, require_subject
from api.v1.dependencies import get_profile_service
from api.v1.schemas.common import BAD_REQUEST_RESPONSE, FORBIDDEN_RESPONSE, NOT_FOUND_RESPONSE
from api.v1.schemas.profile import (
    CompletionResponse,
    FieldUpdateRequest,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpdate,
)
from api.v1.schemas.search import CaregiverSummary, SearchResults, SearchResultsResponse
from core.config import settings
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.profile import Profile, UserRole
from domain.services.profile_service import ProfileLookup, ProfilePatch, ProfileService
from domain.services.search_filters import DEFAULT_PAGE, SearchParams

router = APIRouter(prefix="/users", tags=["users"])


def _detail(profile: Profile, message: str | None = None) -> ProfileDetailResponse:
    return ProfileDetailResponse(data=ProfileResponse.model_validate(profile), message=message)


def _list(profiles: list[Profile]) -> ProfileListResponse:
    return ProfileListResponse(data=[ProfileResponse.model_validate(p) for p in profiles])


def _patch(body: ProfileUpdate) -> ProfilePatch:
    return ProfilePatch(**body.model_dump(exclude_none=True))


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a profile",
    responses=BAD_REQUEST_RESPONSE,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_user(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Register a profile for the authenticated subject.

    Fails with 400 if the external auth id or email is already registered.
    """
    external_auth_id = body.external_auth_id or user.subject_id
    require_subject(user, external_auth_id)
    profile = await service.create(
        external_auth_id=external_auth_id,
        email=body.email,
        role=body.role,
        primary_phone=body.primary_phone,
        display_name=body.display_name or user.display_name,
    )
    return _detail(profile, "User created successfully")


@router.get("", response_model=ProfileListResponse, summary="List all users")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    return _list(await service.get_all())


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get the caller's profile",
    responses=NOT_FOUND_RESPONSE,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    return _detail(await service.get_by_external_auth_id(user.subject_id))


@router.get("/caregivers", response_model=ProfileListResponse, summary="List caregivers")
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_caregivers(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    return _list(await service.get_by_role(UserRole.CAREGIVER))


@router.get(
    "/caregivers/featured",
    response_model=ProfileListResponse,
    summary="List featured caregivers",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_featured_caregivers(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Active caregivers promoted by the platform."""
    return _list(await service.get_featured_caregivers())


@router.get(
    "/caregivers/verified",
    response_model=ProfileListResponse,
    summary="List verified caregivers",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_verified_caregivers(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Active caregivers with a verified identity."""
    return _list(await service.get_verified_caregivers())


@router.get(
    "/search/caregivers",
    response_model=SearchResultsResponse,
    summary="Search caregivers",
    responses=BAD_REQUEST_RESPONSE,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def search_caregivers(
    request: Request,
    province: str | None = Query(None, description="Exact province"),
    languages: str | None = Query(None, description="Substring of the languages list"),
    services: str | None = Query(None, description="Substring of the services offered"),
    specializations: str | None = Query(None, description="Substring of the specializations"),
    min_experience: int | None = Query(None, alias="minExperience"),
    available: bool | None = Query(None, description="Only (in)active caregivers"),
    age_min: int | None = Query(None, alias="ageMin"),
    age_max: int | None = Query(None, alias="ageMax"),
    page: int = Query(DEFAULT_PAGE, description="Zero-based page index"),
    size: int = Query(settings.search_default_page_size, description="Page size"),
    sort: str = Query("relevance", description="relevance, newest or <field>[,asc|desc]"),
    service: ProfileService = Depends(get_profile_service),
) -> SearchResultsResponse:
    """Search active caregivers with optional filters.

    Default ordering puts featured caregivers first, then more complete
    profiles, then older accounts.
    """
    result = await service.search_caregivers(
        SearchParams(
            province=province,
            languages=languages,
            services=services,
            specializations=specializations,
            min_experience=min_experience,
            available=available,
            age_min=age_min,
            age_max=age_max,
            page=page,
            size=size,
            sort=sort,
        )
    )
    return SearchResultsResponse(
        data=SearchResults(
            items=[CaregiverSummary.from_profile(p) for p in result.items],
            total=result.total,
            page=result.page,
            size=result.size,
        )
    )


@router.get(
    "/role/{role}",
    response_model=ProfileListResponse,
    summary="List users by role",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users_by_role(
    request: Request,
    role: UserRole,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    return _list(await service.get_by_role(role))


@router.get(
    "/external/{external_auth_id}",
    response_model=ProfileDetailResponse,
    summary="Get a user by external auth id",
    responses=NOT_FOUND_RESPONSE,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user_by_external_auth_id(
    request: Request,
    external_auth_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    return _detail(await service.get_by_external_auth_id(external_auth_id))


@router.put(
    "/external/{external_auth_id}/profile",
    response_model=ProfileDetailResponse,
    summary="Update a profile by external auth id",
    responses={**NOT_FOUND_RESPONSE, **FORBIDDEN_RESPONSE},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile_by_external_auth_id(
    request: Request,
    external_auth_id: str,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Apply every non-null field of the body; other fields stay as they are."""
    require_subject(user, external_auth_id)
    profile = await service.update_profile(
        ProfileLookup.by_external_auth_id(external_auth_id), _patch(body)
    )
    return _detail(profile, "Profile updated successfully")


@router.patch(
    "/external/{external_auth_id}/profile/{field_name}",
    response_model=ProfileDetailResponse,
    summary="Update one profile field",
    responses={**NOT_FOUND_RESPONSE, **FORBIDDEN_RESPONSE, **BAD_REQUEST_RESPONSE},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile_field(
    request: Request,
    external_auth_id: str,
    field_name: str,
    body: FieldUpdateRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Set a single field by case-insensitive name.

    Unknown field names and values of the wrong type are rejected with 400.
    """
    require_subject(user, external_auth_id)
    profile = await service.update_profile_field(
        ProfileLookup.by_external_auth_id(external_auth_id), field_name, body.value
    )
    return _detail(profile, "Profile field updated successfully")


@router.get(
    "/external/{external_auth_id}/profile/completion",
    response_model=CompletionResponse,
    summary="Get profile completeness",
    responses=NOT_FOUND_RESPONSE,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_completion(
    request: Request,
    external_auth_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> CompletionResponse:
    completion = await service.get_completion(external_auth_id)
    return CompletionResponse(data=completion, message="Profile completion retrieved")


@router.get(
    "/{user_id}",
    response_model=ProfileDetailResponse,
    summary="Get a user by id",
    responses=NOT_FOUND_RESPONSE,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    user_id: int,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    return _detail(await service.get_by_id(user_id))


@router.put(
    "/{user_id}/profile",
    response_model=ProfileDetailResponse,
    summary="Update a profile by id",
    responses={**NOT_FOUND_RESPONSE, **FORBIDDEN_RESPONSE},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile_by_id(
    request: Request,
    user_id: int,
    body: ProfileUpdate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Apply every non-null field of the body; other fields stay as they are."""
    existing = await service.get_by_id(user_id)
    require_subject(user, existing.external_auth_id)
    profile = await service.update_profile(ProfileLookup.by_id(user_id), _patch(body))
    return _detail(profile, "Profile updated successfully")
