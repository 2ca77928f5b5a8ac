from dataclasses import asdict

from fastapi import APIRouter, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from config.logger import get_logger
from config.settings import SpotifySettings
from playlist.adapter.input.web.request.playlist_requests import AddPlaylistRequest, PreviewPlaylistRequest
from playlist.application.usecase.playlist_usecase import PlaylistUseCase, extract_playlist_id
from playlist.domain.exceptions import (
    PlaylistAlreadyTrackedError,
    PlaylistLimitReachedError,
    PlaylistNotFoundError,
    SpotifyApiError,
    SpotifyCredentialsError,
)
from playlist.domain.playlist import Playlist
from playlist.domain.preview_result import PreviewResult
from playlist.infrastructure.client.spotify_client import SpotifyClient
from playlist.infrastructure.repository.playlist_repository_impl import PlaylistRepositoryImpl

playlist_router = APIRouter(tags=["playlists"])
logger = get_logger(__name__)

# one Spotify client per process so the access token cache is shared
usecase = PlaylistUseCase(PlaylistRepositoryImpl(), SpotifyClient(SpotifySettings()))


def _playlist_to_dict(playlist: Playlist) -> dict:
    return {
        "id": playlist.playlist_id,
        "name": playlist.name,
        "owner": playlist.owner_display_name or playlist.owner_id,
        "images": [{"url": playlist.art_url, "height": None, "width": None}] if playlist.art_url else [],
        "isSpotifyGenerated": playlist.is_spotify_generated,
    }


def _preview_to_dict(result: PreviewResult) -> dict:
    payload = {"type": result.type, "id": result.playlist_id}
    if result.metadata is not None:
        payload["data"] = asdict(result.metadata)
    if result.message is not None:
        payload["message"] = result.message
    if result.spotify_generated is not None:
        payload["isSpotifyGenerated"] = result.spotify_generated
    return payload


@playlist_router.get("")
def list_playlists():
    """
    Playlists currently being tracked, ordered by name.
    """
    playlists = usecase.list_playlists()
    return JSONResponse(jsonable_encoder([_playlist_to_dict(p) for p in playlists]))


@playlist_router.post("/preview")
def preview_playlist(request: PreviewPlaylistRequest):
    """
    Checks the tracking limit and duplicates, then looks the playlist up on Spotify.
    type is one of success / fallback / exists / error.
    """
    playlist_id = extract_playlist_id(request.playlist)
    if not playlist_id:
        raise HTTPException(status_code=400, detail="Playlist id is required")
    return JSONResponse(jsonable_encoder(_preview_to_dict(usecase.preview_playlist(playlist_id))))


@playlist_router.post("")
def add_playlist(request: AddPlaylistRequest):
    playlist_id = extract_playlist_id(request.playlist)
    if not playlist_id:
        raise HTTPException(status_code=400, detail="Playlist id is required")
    try:
        playlist = usecase.add_playlist(playlist_id, request.is_fallback)
    except PlaylistAlreadyTrackedError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except PlaylistLimitReachedError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except PlaylistNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception:
        logger.exception("Add playlist error for playlist=%s", playlist_id)
        raise HTTPException(status_code=500, detail="Failed to add playlist to database.")
    return JSONResponse(
        jsonable_encoder({"success": True, "playlistId": playlist.playlist_id}), status_code=201
    )


@playlist_router.get("/{playlist_id}/metadata")
def get_playlist_metadata(playlist_id: str):
    """
    Spotify metadata (name, cover, description, owner with profile images) for the dashboard header.
    """
    try:
        metadata = usecase.get_metadata(playlist_id)
    except PlaylistNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (SpotifyApiError, SpotifyCredentialsError) as exc:
        logger.error("Spotify metadata lookup failed for playlist=%s: %s", playlist_id, exc)
        raise HTTPException(status_code=502, detail="Failed to fetch playlist metadata")
    return JSONResponse(jsonable_encoder(asdict(metadata)))
