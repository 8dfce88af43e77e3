"""
Read-side Query Helpers
=======================

Every helper that returns posts or comments takes the viewer explicitly
as `viewer_id`, an int or None for anonymous browsing, and annotates
`liked_by_user` in the same query with an EXISTS subquery.

Comment threads are stored as an adjacency relation (parent_comment_id).
A post's comments are fetched in ONE query and the tree is assembled in
Python with an id -> node lookup, so loading a thread costs the same
number of queries regardless of nesting depth.
"""

from typing import Optional

from django.db.models import BooleanField, Count, Exists, OuterRef, Q, QuerySet, Value

from .models import Topic, Post, Comment, PostLike, CommentLike


def _liked_by(like_model, fk: str, viewer_id: Optional[int]):
    if viewer_id is None:
        return Value(False, output_field=BooleanField())
    return Exists(
        like_model.objects.filter(**{fk: OuterRef('pk'), 'user_id': viewer_id})
    )


def topics_with_post_count() -> QuerySet:
    """
    Topics with their owner and a derived post_count.

    SELECT topic.*, user.username, COUNT(post.id) AS post_count
    FROM topic JOIN user LEFT JOIN post ... GROUP BY topic.id
    """
    return (
        Topic.objects
        .select_related('created_by')
        .annotate(post_count=Count('posts'))
        .order_by('-created_at')
    )


def posts_for_viewer(viewer_id: Optional[int]) -> QuerySet:
    """All posts with author and the viewer's like state. Newest first."""
    return (
        Post.objects
        .select_related('user')
        .annotate(liked_by_user=_liked_by(PostLike, 'post_id', viewer_id))
        .order_by('-created_at')
    )


def comments_for_viewer(viewer_id: Optional[int]) -> QuerySet:
    """All comments with author and the viewer's like state. Oldest first."""
    return (
        Comment.objects
        .select_related('user')
        .annotate(liked_by_user=_liked_by(CommentLike, 'comment_id', viewer_id))
        .order_by('created_at', 'id')
    )


def get_all_comments_for_post(post_id: int, viewer_id: Optional[int] = None) -> list[Comment]:
    """
    Fetch ALL comments for a post in a SINGLE query, deleted ones included.

    Ordered by created_at so a parent is seen before its replies.
    """
    return list(comments_for_viewer(viewer_id).filter(post_id=post_id))


def build_comment_tree(flat_comments: list) -> list[dict]:
    """
    Build the nested thread from a flat list.

    Two passes over the list: index every comment by id, then attach each
    one to its parent's `replies`. A comment whose parent is not in the
    list is treated as a root.

    Output:
        [
            {'comment': Comment(id=1), 'replies': [
                {'comment': Comment(id=2), 'replies': []},
            ]},
        ]
    """
    nodes = {}
    for comment in flat_comments:
        nodes[comment.id] = {
            'comment': comment,
            'replies': []
        }

    root_nodes = []
    for comment in flat_comments:
        node = nodes[comment.id]
        parent_node = nodes.get(comment.parent_comment_id)
        if parent_node is None:
            root_nodes.append(node)
        else:
            parent_node['replies'].append(node)

    return root_nodes


def search_posts(term: str, viewer_id: Optional[int] = None) -> QuerySet:
    """Posts whose title or content contains `term` (case-insensitive)."""
    return posts_for_viewer(viewer_id).filter(
        Q(title__icontains=term) | Q(content__icontains=term)
    )


def search_topics(term: str) -> QuerySet:
    """Topics whose title or description contains `term` (case-insensitive)."""
    return topics_with_post_count().filter(
        Q(title__icontains=term) | Q(description__icontains=term)
    )
