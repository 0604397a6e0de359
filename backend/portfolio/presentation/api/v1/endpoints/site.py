"""Public site endpoints — read-only page data plus the contact form."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from portfolio.application.schemas import (
    AboutResponse,
    ContactSubmissionCreate,
    FilteredListResponse,
    HomeResponse,
    ProjectResponse,
)
from portfolio.application.services import PublicSiteService
from portfolio.domain.exceptions import EntityNotFoundError, GatewayError
from portfolio.infrastructure.dependencies import get_public_site_service

router = APIRouter(prefix="/site", tags=["Public Site"])


def _bad_gateway(e: GatewayError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


@router.get("/home", response_model=HomeResponse)
async def home(service: PublicSiteService = Depends(get_public_site_service)) -> HomeResponse:
    return HomeResponse(**await service.home())


@router.get("/about", response_model=AboutResponse)
async def about(service: PublicSiteService = Depends(get_public_site_service)) -> AboutResponse:
    try:
        return AboutResponse(**await service.about())
    except GatewayError as e:
        raise _bad_gateway(e)


@router.get("/works", response_model=FilteredListResponse)
async def works(
    search: str | None = Query(None, description="Matches title, description and technologies"),
    category: str | None = Query(None, description="Exact category, or 'all'"),
    service: PublicSiteService = Depends(get_public_site_service),
) -> FilteredListResponse:
    try:
        return FilteredListResponse(**await service.works(search=search, category=category))
    except GatewayError as e:
        raise _bad_gateway(e)


@router.get("/works/{work_id}", response_model=ProjectResponse)
async def project_detail(
    work_id: str,
    service: PublicSiteService = Depends(get_public_site_service),
) -> ProjectResponse:
    try:
        return ProjectResponse(**await service.project(work_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GatewayError as e:
        raise _bad_gateway(e)


@router.get("/blog", response_model=FilteredListResponse)
async def blog(
    search: str | None = Query(None, description="Matches title, excerpt and tags"),
    category: str | None = Query(None, description="Exact category, or 'all'"),
    service: PublicSiteService = Depends(get_public_site_service),
) -> FilteredListResponse:
    try:
        return FilteredListResponse(**await service.blog(search=search, category=category))
    except GatewayError as e:
        raise _bad_gateway(e)


@router.post("/contact", status_code=status.HTTP_201_CREATED)
async def submit_contact(
    data: ContactSubmissionCreate,
    service: PublicSiteService = Depends(get_public_site_service),
) -> dict:
    """Store a contact-form message for the admin inbox."""
    try:
        await service.submit_contact(data.name, data.email, data.subject, data.message)
    except GatewayError as e:
        raise _bad_gateway(e)
    return {"status": "received"}
