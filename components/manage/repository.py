"""Repository for admin management operations."""

import io
from typing import BinaryIO, Dict, List, Tuple

import pandas as pd
import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from components.account.repository import OWNED_TABLES
from components.checklist.models import ChecklistCategory, ChecklistItem
from components.discussions.models import DiscussionPrompt
from components.modules.models import Module
from components.resources.models import Resource
from components.user.repository import UserRepository

logger = structlog.get_logger(__name__)

CHECKLIST_COLUMNS = ["category_slug", "title", "description", "is_required", "sort_order"]
TRUE_VALUES = {"true", "yes", "1", "y"}
FALSE_VALUES = {"false", "no", "0", "n", ""}


class ManageRepository:
    """Repository for admin operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def upload_checklist_from_csv(self, file_content: BinaryIO) -> Tuple[bool, str, List[Dict]]:
        """
        Upload global checklist items from a tab-delimited CSV file.

        Columns: category_slug, title, description, is_required, sort_order.
        Every row is validated before anything is inserted; errors carry the
        file row number (the header is row 1).

        Returns:
            Tuple containing:
            - Success status (bool)
            - Message (str)
            - List of errors if any (List[Dict])
        """
        try:
            df = pd.read_csv(
                io.BytesIO(file_content.read()),
                sep="\t",
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            return False, f"Error reading file: {exc}", []

        df.columns = [str(column).strip() for column in df.columns]
        missing = [column for column in ["category_slug", "title"] if column not in df.columns]
        if missing:
            return False, f"CSV file must contain columns: {', '.join(CHECKLIST_COLUMNS)}", []
        if df.empty:
            return False, "CSV file contains no rows", []

        result = await self.session.execute(select(ChecklistCategory.slug, ChecklistCategory.id))
        categories = {slug: category_id for slug, category_id in result.all()}

        errors = []
        items = []
        for row_num, row in enumerate(df.to_dict("records"), start=2):  # header is row 1
            slug = row.get("category_slug", "").strip()
            title = row.get("title", "").strip()
            if slug not in categories:
                errors.append({"row": row_num, "message": f"Unknown category '{slug}'"})
                continue
            if not title:
                errors.append({"row": row_num, "message": "Title cannot be empty"})
                continue
            if len(title) > 255:
                errors.append({"row": row_num, "message": "Title must be 255 characters or less"})
                continue

            is_required = row.get("is_required", "").strip().lower()
            if is_required not in TRUE_VALUES | FALSE_VALUES:
                errors.append({"row": row_num, "message": f"Invalid is_required value: {row['is_required']}"})
                continue

            sort_order = row.get("sort_order", "").strip()
            if sort_order and not sort_order.lstrip("-").isdigit():
                errors.append({"row": row_num, "message": f"Invalid sort_order: {sort_order}"})
                continue

            items.append(
                ChecklistItem(
                    category_id=categories[slug],
                    title=title,
                    description=row.get("description", "").strip() or None,
                    is_required=is_required in TRUE_VALUES,
                    sort_order=int(sort_order) if sort_order else row_num - 1,
                )
            )

        if errors:
            logger.info("checklist_upload_rejected", errors=len(errors))
            return False, "Validation errors occurred", errors

        self.session.add_all(items)
        await self.session.commit()
        logger.info("checklist_uploaded", created=len(items))
        return True, f"{len(items)} checklist items uploaded successfully", []

    async def _count(self, model, *criteria) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def stats(self) -> Dict:
        return {
            "users": await UserRepository(self.session).count(),
            "checklist_items": await self._count(ChecklistItem, ChecklistItem.created_by.is_(None)),
            "modules": await self._count(Module),
            "published_modules": await self._count(Module, Module.is_published.is_(True)),
            "discussion_prompts": await self._count(DiscussionPrompt),
            "resources": await self._count(Resource),
            "rows": {key: await self._count(model) for key, model in OWNED_TABLES.items()},
        }
