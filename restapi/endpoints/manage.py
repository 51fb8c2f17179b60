"""Admin endpoints for content management."""

import io
from typing import Any

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeEvent, ChangeFeed
from components.core.init_db import get_db, get_feed
from components.manage import schemas
from components.manage.repository import ManageRepository
from components.modules import schemas as module_schemas
from components.modules.repository import ModuleRepository
from components.resources import schemas as resource_schemas
from components.resources.repository import ResourceRepository
from components.user.models import User
from restapi.endpoints.auth import require_admin

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/manage",
    tags=["manage"],
    responses={403: {"description": "Admin access required"}, 404: {"description": "Not found"}},
)


@router.post("/checklist/upload", response_model=schemas.UploadResponse)
async def upload_checklist(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    feed: ChangeFeed = Depends(get_feed),
    admin: User = Depends(require_admin)
):
    """
    Upload global checklist items from a tab-delimited file.

    The file must have the following columns:
    - category_slug: Slug of an existing checklist category (e.g. spiritual)
    - title: Item title (cannot be empty)
    - description: Optional text
    - is_required: true/false, yes/no or 1/0 (empty means false)
    - sort_order: Optional integer; defaults to the row position

    Nothing is inserted unless every row is valid.
    """
    if not file.filename or not file.filename.lower().endswith((".csv", ".tsv")):
        return schemas.UploadResponse(
            success=False,
            message="Invalid file format. Only CSV files (.csv, .tsv) are supported."
        )

    file_content = await file.read()
    success, message, errors = await ManageRepository(db).upload_checklist_from_csv(io.BytesIO(file_content))

    if not success:
        return schemas.UploadResponse(
            success=False,
            message=message,
            errors=[schemas.UploadError(**error) for error in errors]
        )

    await feed.publish(ChangeEvent("checklist_items", admin.id, "INSERT"))
    return schemas.UploadResponse(success=True, message=message)


@router.post("/resources", response_model=resource_schemas.Resource, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource: resource_schemas.ResourceCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
) -> Any:
    created = await ResourceRepository(db).create(resource.model_dump())
    logger.info("resource_created", resource_id=created.id, admin_id=admin.id)
    return created


@router.put("/resources/{resource_id}", response_model=resource_schemas.Resource)
async def update_resource(
    resource_id: int,
    changes: resource_schemas.ResourceUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
) -> Any:
    """Update a resource; omitted fields keep their value."""
    repo = ResourceRepository(db)
    resource = await repo.get(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return await repo.update(resource, changes.model_dump(exclude_unset=True))


@router.delete("/resources/{resource_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resource(
    resource_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
) -> None:
    """Delete a resource; favorites pointing at it go with it."""
    repo = ResourceRepository(db)
    resource = await repo.get(resource_id)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    await repo.delete(resource)
    logger.info("resource_deleted", resource_id=resource_id, admin_id=admin.id)


@router.put("/modules/{slug}/publish", response_model=module_schemas.ModuleDetail)
async def publish_module(
    slug: str,
    body: module_schemas.PublishUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
) -> Any:
    """Publish or unpublish a module."""
    repo = ModuleRepository(db)
    module = await repo.get_by_slug(slug, include_unpublished=True)
    if module is None:
        raise HTTPException(status_code=404, detail="Module not found")
    module = await repo.set_published(module, body.is_published)
    logger.info("module_publish_changed", slug=slug, is_published=body.is_published)
    return repo.detail(module)


@router.get("/stats", response_model=schemas.Stats)
async def read_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin)
) -> Any:
    """User count and row counts per feature."""
    return await ManageRepository(db).stats()
