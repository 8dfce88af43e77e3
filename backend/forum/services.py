"""
Like & Soft-Delete Services
===========================

toggle_like flips whether a user likes a post or comment and keeps the
entity's denormalized `likes` counter equal to its number of like rows.

CONCURRENCY STRATEGY:
---------------------
Everything happens inside one transaction.atomic() block:

1. SELECT ... FOR UPDATE on the target row. This both checks that the
   target exists and serializes toggles on the same entity, so the
   existence check of the like row and the counter update below cannot
   interleave with another toggle on that entity.
2. Check for the (entity, user) like row.
3. Delete it and decrement, or insert it and increment. Counters move
   with F() expressions so the arithmetic happens in the database.

The unique constraint on the like tables is the last line: if two
inserts for the same pair still race (e.g. a backend without row locks),
the loser gets an IntegrityError, its transaction is rolled back in full,
and the caller sees LikeConflict. The service never retries by itself.

mark_deleted sets Comment.deleted with a single UPDATE. The row and its
content stay in storage; redaction happens at read time.
"""

import logging

from django.db import transaction, IntegrityError
from django.db.models import F

from .exceptions import ResourceNotFound, LikeConflict
from .models import Post, Comment, PostLike, CommentLike, LikeTarget

logger = logging.getLogger(__name__)


# target kind -> (entity model, like model, like FK column)
LIKE_MODELS = {
    LikeTarget.POST: (Post, PostLike, 'post_id'),
    LikeTarget.COMMENT: (Comment, CommentLike, 'comment_id'),
}


class LikeResult:
    """Outcome of a toggle: the user's final like state and the new counter."""
    def __init__(self, target: str, target_id: int, liked: bool, likes: int):
        self.target = target
        self.target_id = target_id
        self.liked = liked
        self.likes = likes

    def __repr__(self):
        return (
            f"LikeResult(target={self.target!r}, target_id={self.target_id}, "
            f"liked={self.liked}, likes={self.likes})"
        )


def toggle_like(target: str, target_id: int, user_id: int) -> LikeResult:
    """
    Like the target if `user_id` does not like it yet, otherwise unlike it.

    Raises:
        ValueError: unknown target kind
        ResourceNotFound: the post/comment does not exist
        LikeConflict: lost a race against a concurrent toggle of the same pair
        DatabaseError: any other store failure; nothing was applied
    """
    try:
        kind = LikeTarget(target)
    except ValueError:
        raise ValueError(f"Invalid like target: {target}")

    model, like_model, fk = LIKE_MODELS[kind]
    pair = {fk: target_id, 'user_id': user_id}

    try:
        with transaction.atomic():
            locked = (
                model.objects
                .select_for_update()
                .filter(id=target_id)
                .values_list('id', flat=True)
                .first()
            )
            if locked is None:
                raise ResourceNotFound(kind.value, target_id)

            existing = like_model.objects.filter(**pair)
            if existing.exists():
                existing.delete()
                delta = -1
            else:
                like_model.objects.create(**pair)
                delta = 1

            model.objects.filter(id=target_id).update(likes=F('likes') + delta)
            likes = model.objects.filter(id=target_id).values_list('likes', flat=True).get()

    except IntegrityError as exc:
        logger.warning(
            "Like conflict on %s %s by user %s: %s", kind.value, target_id, user_id, exc
        )
        raise LikeConflict()

    liked = delta > 0
    logger.info(
        "User %s %s %s %s (likes=%s)",
        user_id, 'liked' if liked else 'unliked', kind.value, target_id, likes
    )
    return LikeResult(kind.value, target_id, liked, likes)


def mark_deleted(comment_id: int) -> None:
    """
    Soft-delete a comment. Idempotent: deleting twice is not an error.

    Only the flag changes; content, likes and timestamps are left as stored.
    """
    updated = Comment.objects.filter(id=comment_id).update(deleted=True)
    if not updated:
        raise ResourceNotFound('comment', comment_id)
    logger.info("Comment %s marked deleted", comment_id)
