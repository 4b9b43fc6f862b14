"""Background tasks endpoints."""
from fastapi import APIRouter

from cinedex.schemas import TaskResponse

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("/refresh-trending", response_model=TaskResponse)
async def trigger_trending_refresh():
    """Manually trigger a refresh of the cached trending list.

    Returns:
        Task info
    """
    from cinedex.tasks.trending_refresh import refresh_trending

    task = refresh_trending.delay()

    return TaskResponse(
        task_id=task.id,
        status="started",
        message="Trending refresh task started"
    )
