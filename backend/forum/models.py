"""
Data Models for the Forum
=========================

Layout:
-------
1. Topic -> Post -> Comment, each owned by a User fixed at creation.

2. Comments form threads through a nullable self-reference
   (parent_comment). Threads are rebuilt at read time from the flat list
   of a post's comments, see queries.build_comment_tree.

3. Likes live in two join tables, PostLike and CommentLike, one row per
   (entity, user). A unique constraint makes a second row for the same
   pair impossible at the database level.

4. Post.likes and Comment.likes are denormalized counters. They are only
   changed by services.toggle_like, in the same transaction as the join
   row, and always equal the number of join rows for the entity.

5. Comments are soft-deleted (deleted flag, row kept). Posts and topics
   are hard-deleted and cascade to everything below them.

Indexes Strategy:
-----------------
- post.topic + post.created_at: posts of a topic, newest first
- comment.post + comment.created_at: all comments of a post, in order
- postlike/commentlike (entity, user): uniqueness + "liked by viewer"
"""

from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinLengthValidator
from django.utils import timezone


class Topic(models.Model):
    """A discussion topic. Posts are created inside a topic."""
    title = models.CharField(
        max_length=200,
        validators=[MinLengthValidator(1)]
    )
    description = models.TextField()
    created_by = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='topics'
    )
    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title[:50]


class Post(models.Model):
    """
    A post inside a topic.

    No soft-delete: deleting a post removes the row together with its
    comments and likes.
    """
    topic = models.ForeignKey(
        Topic,
        on_delete=models.CASCADE,
        related_name='posts'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='posts',
        db_index=True
    )
    title = models.CharField(max_length=300)
    content = models.TextField()
    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True  # feed ordering, cursor pagination
    )
    updated_at = models.DateTimeField(auto_now=True)

    # Equals PostLike.objects.filter(post=self).count(); see services.toggle_like
    likes = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['topic', '-created_at'], name='post_topic_created_idx'),
        ]

    def __str__(self):
        return f"{self.title[:50]} by {self.user.username}"


class Comment(models.Model):
    """
    Threaded comment on a post.

    parent_comment, when set, points at a comment on the same post.
    Deletion only sets the deleted flag; what readers then see is
    decided by redaction.redact_comment.
    """
    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name='comments',
        db_index=True
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='comments'
    )
    parent_comment = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='replies'
    )
    content = models.TextField(
        validators=[MinLengthValidator(1)]
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    # Equals CommentLike.objects.filter(comment=self).count()
    likes = models.PositiveIntegerField(default=0)

    # false -> true once, never back
    deleted = models.BooleanField(default=False)

    class Meta:
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['post', 'created_at'], name='comment_post_created_idx'),
        ]

    def __str__(self):
        return f"Comment by {self.user.username} on {self.post_id}"


class PostLike(models.Model):
    """One user's like on one post. Existence of the row means "liked"."""
    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name='like_rows'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='post_likes'
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['post', 'user'],
                name='unique_like_per_user_per_post'
            )
        ]

    def __str__(self):
        return f"{self.user_id} liked post {self.post_id}"


class CommentLike(models.Model):
    """One user's like on one comment."""
    comment = models.ForeignKey(
        Comment,
        on_delete=models.CASCADE,
        related_name='like_rows'
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='comment_likes'
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['comment', 'user'],
                name='unique_like_per_user_per_comment'
            )
        ]

    def __str__(self):
        return f"{self.user_id} liked comment {self.comment_id}"


class LikeTarget(models.TextChoices):
    """Kinds of entity the toggle-like engine works on."""
    POST = 'post', 'Post'
    COMMENT = 'comment', 'Comment'


# ============================================================================
# USERNAME RULES
# ============================================================================
USERNAME_MIN_LENGTH = 7
USERNAME_MAX_LENGTH = 15
