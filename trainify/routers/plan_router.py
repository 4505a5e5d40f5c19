# trainify/routers/plan_router.py

"""
API router for the plan workflow of Trainify AI.

This router provides endpoints for generating the plans, reading and rendering
the current plans, exporting them to PDF, and tracking the workout streak.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sse_starlette.sse import EventSourceResponse

from trainify.dependencies import get_plan_manager
from trainify.errors import ExportError
from trainify.plan_manager import PlanManager
from trainify.schemas import ExportRequest, PlanRenderRequest, StreakMarkRequest, UserDetails


# Create an API router for plan-related endpoints.
router = APIRouter()

NO_PLANS_DETAIL = "No plans generated yet. Please generate a plan first."


@router.post("/generate_plan", summary="Generate Personalized Fitness Plans")
async def generate_plan(req: UserDetails, manager: PlanManager = Depends(get_plan_manager)):
    """
    Generates the workout, diet and motivation plans for the submitted details.

    Progress is streamed back as Server-Sent Events: `status` messages, one
    `plan` event per category and a final `complete`, or an `error` event when
    the AI service cannot be used (missing key, rate limit, rejected key).

    Args:
        req (UserDetails): The user's form input.
        manager (PlanManager): The dependency-injected plan manager instance.

    Returns:
        EventSourceResponse: A streaming response of server-sent events.
    """
    event_generator = manager.generate_and_initialize_plans(req)
    return EventSourceResponse(event_generator)


@router.get("/plans", summary="Get the Current Plans")
def get_plans(manager: PlanManager = Depends(get_plan_manager)):
    """
    Returns the user details and the three plans of the current session.

    Raises:
        HTTPException: 404 if no plans have been generated yet.
    """
    current = manager.get_current_plans()
    if not current:
        raise HTTPException(status_code=404, detail=NO_PLANS_DETAIL)
    return current


@router.post("/plans/render", summary="Render a Plan into Display Blocks")
def render_plan(req: PlanRenderRequest, manager: PlanManager = Depends(get_plan_manager)):
    """
    Segments a plan and returns its display blocks with their action keys.

    Args:
        req (PlanRenderRequest): The category, and optionally the raw plan text.
        manager (PlanManager): The dependency-injected plan manager instance.

    Raises:
        HTTPException: 404 if no text is given and no plans exist yet.
    """
    try:
        blocks = manager.render(req.category, req.plan)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"category": req.category.value, "blocks": [block.model_dump() for block in blocks]}


@router.post("/export", summary="Export the Plans as PDF")
def export_pdf(req: ExportRequest, manager: PlanManager = Depends(get_plan_manager)):
    """
    Builds the PDF document; plans omitted from the body come from the session.

    Returns:
        Response: The PDF as an attachment named `trainify-ai-plan.pdf`.

    Raises:
        HTTPException: 404 if a plan is missing from both the body and the session.
        ExportError: If the document could not be produced.
    """
    try:
        result = manager.export_pdf(req.workout, req.diet, req.motivation)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if not result.success:
        raise ExportError(result.error or "Failed to export PDF.")
    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/streak", summary="Get the Workout Streak")
def get_streak(manager: PlanManager = Depends(get_plan_manager)):
    """Returns the streak record, the current and longest streaks, and the 14-day calendar."""
    return manager.get_streak()


@router.post("/streak/mark", summary="Mark a Workout as Done")
def mark_streak(req: StreakMarkRequest, manager: PlanManager = Depends(get_plan_manager)):
    """Marks `req.day` (default today) as a workout day and returns the updated streak."""
    return manager.mark_workout(req.day)
