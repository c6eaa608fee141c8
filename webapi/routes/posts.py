"""
Post endpoints.

Reads are public. Create and update require a content-bound token whose
signed payload matches the request body; delete requires only a valid
token. Only a post's author may update or delete it.
"""

import logging
from dataclasses import replace

from flask import Blueprint, g, jsonify, request

from core.errors import NotFoundError, PermissionDeniedError
from core.timestamps import now
from webapi.auth import content_signature_required, jwt_required
from webapi.schemas import PostRequest, parse_body
from webapi.store import Post, get_post_store, get_user_store

logger = logging.getLogger(__name__)

# Create blueprint
posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')


def _with_author(post: Post) -> dict:
    return post.to_dict(get_user_store().find(post.author_id))


def _get_post_or_404(post_id: int) -> Post:
    post = get_post_store().find(post_id)
    if post is None:
        raise NotFoundError("Post not found", message=f"Post with ID {post_id} does not exist")
    return post


def _require_owner(post: Post, action: str) -> None:
    if post.author_id != g.user_id:
        raise PermissionDeniedError("Access denied", message=f"You can only {action} your own posts")


@posts_bp.route('', methods=['GET'])
def list_posts():
    posts = [_with_author(p) for p in get_post_store().list()]
    return jsonify({
        "message": "Posts retrieved successfully",
        "count": len(posts),
        "posts": posts,
    })


@posts_bp.route('/<int:post_id>', methods=['GET'])
def get_post(post_id):
    post = _get_post_or_404(post_id)
    return jsonify({
        "message": "Post retrieved successfully",
        "post": _with_author(post),
    })


@posts_bp.route('', methods=['POST'])
@jwt_required
@content_signature_required
def create_post():
    """Create a post from a body that was signed via /auth/sign-content."""
    body = parse_body(PostRequest, request.get_json(silent=True))

    post = get_post_store().insert(Post(
        id=0,
        title=body.title,
        content=body.content,
        author_id=g.user_id,
    ))
    logger.info(f"Post {post.id} created by user_id={g.user_id}")

    return jsonify({
        "message": "Post created successfully",
        "post": _with_author(post),
    }), 201


@posts_bp.route('/<int:post_id>', methods=['PUT'])
@jwt_required
@content_signature_required
def update_post(post_id):
    body = parse_body(PostRequest, request.get_json(silent=True))

    post = _get_post_or_404(post_id)
    _require_owner(post, "update")

    post = get_post_store().replace(
        replace(post, title=body.title, content=body.content, updated_at=now())
    )

    return jsonify({
        "message": "Post updated successfully",
        "post": _with_author(post),
    })


@posts_bp.route('/<int:post_id>', methods=['DELETE'])
@jwt_required
def delete_post(post_id):
    post = _get_post_or_404(post_id)
    _require_owner(post, "delete")

    get_post_store().remove(post_id)
    logger.info(f"Post {post_id} deleted by user_id={g.user_id}")

    return jsonify({
        "message": "Post deleted successfully",
        "deleted_post": {"id": post.id, "title": post.title},
    })
