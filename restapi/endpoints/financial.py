"""Financial tracker and calculator endpoints for the API."""

from typing import Any, Type

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeFeed, QueryCache
from components.core.init_db import get_cache, get_db, get_feed
from components.financial import calculations, schemas
from components.financial.export import export_filename, rows_to_csv
from components.financial.forms import (
    BudgetForm,
    FinancialForm,
    MahrForm,
    SavingsGoalsForm,
    WeddingBudgetForm,
)
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/financial",
    tags=["financial"],
    responses={404: {"description": "Not found"}},
)


def add_tracker_routes(
    feature: str,
    form_class: Type[FinancialForm],
    submit_schema: Type[BaseModel],
    view_schema: Type[BaseModel],
) -> None:
    """Register GET, PUT and CSV export for one single-row tracker."""

    async def read(
        db: AsyncSession = Depends(get_db),
        cache: QueryCache = Depends(get_cache),
        feed: ChangeFeed = Depends(get_feed),
        current_user: User = Depends(get_current_user),
    ) -> Any:
        return await form_class(db, cache, feed).view(current_user.id)

    async def save(
        payload: submit_schema,
        db: AsyncSession = Depends(get_db),
        cache: QueryCache = Depends(get_cache),
        feed: ChangeFeed = Depends(get_feed),
        current_user: User = Depends(get_current_user),
    ) -> Any:
        return await form_class(db, cache, feed).save(current_user.id, payload.model_dump(exclude_unset=True))

    async def export(
        db: AsyncSession = Depends(get_db),
        cache: QueryCache = Depends(get_cache),
        feed: ChangeFeed = Depends(get_feed),
        current_user: User = Depends(get_current_user),
    ) -> Response:
        form = form_class(db, cache, feed)
        view = await form.view(current_user.id)
        if view["record"] is None:
            raise HTTPException(status_code=404, detail="No data to export")
        content = rows_to_csv(form.export_rows(view["record"], view["summary"]))
        filename = export_filename(feature)
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    label = feature.replace("-", " ")
    router.add_api_route(
        f"/{feature}", read, methods=["GET"], response_model=view_schema,
        summary=f"Get {label}", description=f"Saved {label} with its derived summary.",
    )
    router.add_api_route(
        f"/{feature}", save, methods=["PUT"], response_model=view_schema,
        summary=f"Save {label}",
        description="Validate and upsert; currency fields accept numbers or strings such as \"$1,234.50\".",
    )
    router.add_api_route(f"/{feature}/export", export, methods=["GET"], summary=f"Export {label} as CSV")


add_tracker_routes("budget", BudgetForm, schemas.BudgetIn, schemas.BudgetView)
add_tracker_routes("mahr", MahrForm, schemas.MahrIn, schemas.MahrView)
add_tracker_routes("wedding-budget", WeddingBudgetForm, schemas.WeddingBudgetIn, schemas.WeddingBudgetView)
add_tracker_routes("savings-goals", SavingsGoalsForm, schemas.SavingsGoalsIn, schemas.SavingsGoalsView)


@router.post("/calculators/wedding-breakdown", response_model=schemas.WeddingBreakdown)
async def wedding_breakdown(body: schemas.WeddingBreakdownRequest) -> Any:
    """Suggested split of a total wedding budget across categories."""
    return calculations.calculate_wedding_breakdown(
        body.total_budget,
        body.guest_count,
        body.venue_type,
        body.include_photography,
        body.include_videography,
        body.include_live_music,
    )


@router.post("/calculators/savings-plan", response_model=schemas.SavingsPlan)
async def savings_plan(body: schemas.SavingsPlanRequest) -> Any:
    """Monthly saving needed for a target, and when it is reached at the current rate."""
    return calculations.calculate_savings_plan(
        body.target_amount,
        body.current_savings,
        body.monthly_income,
        body.monthly_expenses,
        body.target_date,
    )


@router.post("/calculators/cost-split", response_model=schemas.CostSplit)
async def cost_split(body: schemas.CostSplitRequest) -> Any:
    """Share of the wedding cost covered by each contributor."""
    return calculations.calculate_cost_split(
        body.total_cost,
        body.bride_contribution,
        body.groom_contribution,
        [contribution.model_dump() for contribution in body.family_contributions],
    )


@router.post("/calculators/mahr-range", response_model=schemas.MahrRange)
async def mahr_range(body: schemas.MahrRangeRequest) -> Any:
    """
    Suggested mahr range.

    Uses ``region_average`` when given, otherwise the average for ``region``.
    """
    average = body.region_average
    if average is None:
        if body.region not in calculations.REGIONAL_MAHR_AVERAGES:
            raise HTTPException(
                status_code=422,
                detail=f"Unknown region. Choose one of: {', '.join(calculations.REGIONAL_MAHR_AVERAGES)}",
            )
        average = calculations.REGIONAL_MAHR_AVERAGES[body.region]
    return calculations.calculate_mahr_range(average, body.education_level, body.years_working, body.custom_factor)
