from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from config.logger import get_logger
from timeline.adapter.input.web.response.timeline_response import timeline_to_dict
from timeline.application.usecase.timeline_query_usecase import TimelineQueryUseCase
from timeline.infrastructure.repository.history_repository_impl import HistoryRepositoryImpl

timeline_router = APIRouter(tags=["timeline"])
logger = get_logger(__name__)

# history store + builder are stateless, one shared instance serves every request
usecase = TimelineQueryUseCase(HistoryRepositoryImpl())


@timeline_router.get("/{playlist_id}/timeline")
def get_timeline(playlist_id: str):
    """
    Rank snapshots at every event date of the playlist plus leaderboard statistics.
    """
    try:
        timeline = usecase.get_timeline(playlist_id)
        return JSONResponse(timeline_to_dict(timeline))
    except Exception:
        logger.exception("Error generating timeline for playlist=%s", playlist_id)
        raise HTTPException(status_code=500, detail="Failed to generate timeline")
