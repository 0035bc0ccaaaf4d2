"""
API v1 post routes.

Every endpoint requires a valid bearer token (see get_current_identity):
- POST /posts - Create a draft post
- GET /posts - List all posts
- GET /posts/{post_id} - Fetch one post
- PATCH /posts/{post_id} - Merge fields onto a post
- DELETE /posts/{post_id} - Delete a post
- PATCH /posts/{post_id}/view - Count one view
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from postboard.api.dependencies import get_current_identity, get_post_service
from postboard.api.models import ErrorResponse, PostCreateRequest, PostResponse, PostUpdateRequest
from postboard.domain.entities import Identity
from postboard.domain.exceptions import MalformedIdentifier, PostNotFound
from postboard.domain.posts import PostService

logger = logging.getLogger(__name__)

_AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing bearer token"},
    403: {"model": ErrorResponse, "description": "Invalid or expired token"},
}
_ID_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid data or ID"},
    404: {"model": ErrorResponse, "description": "Post not found"},
}

router = APIRouter(prefix="/posts", tags=["posts"], responses=_AUTH_RESPONSES)


def _invalid_id() -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID")


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Invalid data or missing fields"}},
    summary="Create a post",
)
async def create_post(
    request_data: PostCreateRequest,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """
    Create a draft post with zero views.

    - **title**: At least 5 characters
    - **text**: At least 5 characters
    - **author**: Free-form author name
    """
    post = service.create(request_data.title, request_data.text, request_data.author)
    logger.debug("Post %s created by user %s", post.id, identity.user_id)
    return PostResponse.from_entity(post)


@router.get("", response_model=list[PostResponse], summary="List all posts")
async def list_posts(
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    return [PostResponse.from_entity(post) for post in service.list_all()]


@router.get("/{post_id}", response_model=PostResponse, responses=_ID_RESPONSES, summary="Get a post")
async def get_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    try:
        post = service.get(post_id)
    except MalformedIdentifier:
        raise _invalid_id() from None
    except PostNotFound:
        raise _not_found() from None
    return PostResponse.from_entity(post)


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    responses=_ID_RESPONSES,
    summary="Update a post",
    description="Merge the fields present in the body onto the post. "
    "Fields outside the configured allow-list are ignored.",
)
async def update_post(
    post_id: str,
    request_data: PostUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    try:
        post = service.update(post_id, request_data.model_dump(exclude_unset=True))
    except MalformedIdentifier:
        raise _invalid_id() from None
    except PostNotFound:
        raise _not_found() from None
    logger.debug("Post %s updated by user %s", post.id, identity.user_id)
    return PostResponse.from_entity(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ID_RESPONSES,
    summary="Delete a post",
)
async def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> Response:
    try:
        service.delete(post_id)
    except MalformedIdentifier:
        raise _invalid_id() from None
    except PostNotFound:
        raise _not_found() from None
    logger.debug("Post %s deleted by user %s", post_id, identity.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{post_id}/view",
    response_model=PostResponse,
    responses=_ID_RESPONSES,
    summary="Count a view",
    description="Atomically increment the post's view counter by one.",
)
async def view_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    try:
        post = service.view(post_id)
    except MalformedIdentifier:
        raise _invalid_id() from None
    except PostNotFound:
        raise _not_found() from None
    return PostResponse.from_entity(post)
