# app/api/routers/movies.py
from __future__ import annotations

"""
Movies API
==========

Endpoints
---------
GET    /movies                     → list (optional `?user=` owner filter)
GET    /movies/{movieId}           → one movie
POST   /movies/add/movie           → create (session required)
PUT    /movies/edit/{movieId}      → partial update
DELETE /movies/delete/{movieId}    → delete an owned movie (session required)
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from app.dependencies.session import get_session_user
from app.repositories.documents import DocumentRepositoryProtocol
from app.repositories.movies import get_movies_repository
from app.schemas.body import parse_body
from app.schemas.movie import AddMovieRequest, DeleteResult, EditMovieRequest, MovieOut
from app.schemas.user import SessionUser
from app.services import movies_service

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get("", response_model=List[MovieOut], summary="List movies")
async def list_movies(
    user: Optional[str] = Query(None, description="Only movies owned by this user id"),
    limit: int = Query(100, ge=1, le=500),
    repo: DocumentRepositoryProtocol = Depends(get_movies_repository),
):
    return await movies_service.list_movies(repo=repo, user=user, limit=limit)


@router.get("/{movieId}", response_model=MovieOut, summary="Get a movie")
async def get_movie(
    movie_id: str = Path(..., alias="movieId"),
    repo: DocumentRepositoryProtocol = Depends(get_movies_repository),
):
    return await movies_service.get_movie(movie_id, repo=repo)


@router.post(
    "/add/movie",
    response_model=MovieOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a movie",
)
async def add_movie(
    body: Any = Body(None),
    identity: Optional[SessionUser] = Depends(get_session_user),
    repo: DocumentRepositoryProtocol = Depends(get_movies_repository),
):
    payload = parse_body(AddMovieRequest, body)
    return await movies_service.add_movie(payload, identity=identity, repo=repo)


@router.put("/edit/{movieId}", response_model=MovieOut, summary="Update a movie")
async def edit_movie(
    movie_id: str = Path(..., alias="movieId"),
    body: Any = Body(None),
    repo: DocumentRepositoryProtocol = Depends(get_movies_repository),
):
    payload = parse_body(EditMovieRequest, body)
    return await movies_service.edit_movie(movie_id, payload, repo=repo)


@router.delete("/delete/{movieId}", response_model=DeleteResult, summary="Delete a movie")
async def delete_movie(
    movie_id: str = Path(..., alias="movieId"),
    identity: Optional[SessionUser] = Depends(get_session_user),
    repo: DocumentRepositoryProtocol = Depends(get_movies_repository),
):
    await movies_service.delete_movie(movie_id, identity=identity, repo=repo)
    return DeleteResult(message="Movie deleted")


__all__ = ["router"]
