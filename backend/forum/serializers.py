"""
DRF Serializers
===============

Serializers handle:
1. Validation of incoming data
2. Transformation of model instances to JSON
3. Redaction of deleted comments on the way out

DESIGN DECISIONS:
-----------------
1. Separate serializers for reading and writing each resource
2. The owner is never taken from the request body; views pass it to save()
3. JSON field names follow the public API: user_id, topic_id, post_id,
   parent_comment_id, likes, liked_by_user, deleted
"""

from rest_framework import serializers
from django.contrib.auth.models import User

from .models import Topic, Post, Comment, LikeTarget, USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH
from .redaction import redact_comment


class UserSerializer(serializers.ModelSerializer):
    """Public user representation."""
    created_at = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'created_at']
        read_only_fields = fields


class UsernameSerializer(serializers.Serializer):
    """Body of register and login requests."""
    username = serializers.CharField(trim_whitespace=False)


class RegisterSerializer(UsernameSerializer):
    """
    Validates a new username: 7 to 15 characters, no whitespace.

    Uniqueness is checked by the view, which answers 409 rather than 400.
    """

    def validate_username(self, value):
        if any(ch.isspace() for ch in value):
            raise serializers.ValidationError("Username cannot contain whitespace.")
        if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
            raise serializers.ValidationError(
                f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters."
            )
        return value


# ============================================================================
# TOPICS
# ============================================================================

class TopicSerializer(serializers.ModelSerializer):
    """
    Topic for reading and writing.

    post_count comes from queries.topics_with_post_count(); freshly created
    topics have none.
    """
    created_by = serializers.IntegerField(source='created_by_id', read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True)
    post_count = serializers.SerializerMethodField()

    class Meta:
        model = Topic
        fields = [
            'id',
            'title',
            'description',
            'created_by',
            'created_by_username',
            'created_at',
            'post_count',
        ]
        read_only_fields = ['created_at']

    def get_post_count(self, obj):
        return getattr(obj, 'post_count', 0)

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()

    def validate_description(self, value):
        if not value.strip():
            raise serializers.ValidationError("Description is required.")
        return value.strip()


# ============================================================================
# POSTS
# ============================================================================

class PostSerializer(serializers.ModelSerializer):
    """
    Post as returned to readers.

    liked_by_user is annotated by queries.posts_for_viewer().
    """
    topic_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    created_by_username = serializers.CharField(source='user.username', read_only=True)
    liked_by_user = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            'id',
            'title',
            'content',
            'topic_id',
            'user_id',
            'created_by_username',
            'likes',
            'liked_by_user',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_liked_by_user(self, obj):
        return bool(getattr(obj, 'liked_by_user', False))


class PostWriteSerializer(serializers.ModelSerializer):
    """
    Create or update a post.

    topic_id is only accepted on create; a post never moves between topics.
    """
    topic_id = serializers.PrimaryKeyRelatedField(
        source='topic',
        queryset=Topic.objects.all()
    )

    class Meta:
        model = Post
        fields = ['topic_id', 'title', 'content']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance is not None:
            self.fields.pop('topic_id')

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Content is required.")
        return value.strip()


# ============================================================================
# COMMENTS
# ============================================================================

class CommentSerializer(serializers.ModelSerializer):
    """
    Comment as returned to readers.

    Every representation goes through redact_comment, so a deleted comment
    can never leave the API with its content or author name.
    """
    post_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    parent_comment_id = serializers.IntegerField(read_only=True, allow_null=True)
    created_by_username = serializers.CharField(source='user.username', read_only=True)
    liked_by_user = serializers.SerializerMethodField()

    class Meta:
        model = Comment
        fields = [
            'id',
            'content',
            'likes',
            'created_at',
            'updated_at',
            'post_id',
            'user_id',
            'deleted',
            'parent_comment_id',
            'liked_by_user',
            'created_by_username',
        ]
        read_only_fields = fields

    def get_liked_by_user(self, obj):
        return bool(getattr(obj, 'liked_by_user', False))

    def to_representation(self, instance):
        return redact_comment(super().to_representation(instance))


class CommentCreateSerializer(serializers.ModelSerializer):
    """
    Create a comment.

    Validates that:
    1. Parent comment (if provided) belongs to the same post
    2. Content is not empty
    """
    post_id = serializers.PrimaryKeyRelatedField(
        source='post',
        queryset=Post.objects.all()
    )
    parent_comment_id = serializers.PrimaryKeyRelatedField(
        source='parent_comment',
        queryset=Comment.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta:
        model = Comment
        fields = ['post_id', 'content', 'parent_comment_id']

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Comment cannot be empty.")
        return value.strip()

    def validate(self, attrs):
        parent = attrs.get('parent_comment')
        if parent is not None and parent.post_id != attrs['post'].id:
            raise serializers.ValidationError({
                'parent_comment_id': 'Parent comment must belong to the same post.'
            })
        return attrs


class CommentUpdateSerializer(serializers.ModelSerializer):
    """Edit a comment's content. Deleted comments cannot be edited."""

    class Meta:
        model = Comment
        fields = ['content']

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Comment cannot be empty.")
        return value.strip()

    def validate(self, attrs):
        if self.instance is not None and self.instance.deleted:
            raise serializers.ValidationError("Deleted comments cannot be edited.")
        return attrs


class CommentTreeSerializer(serializers.Serializer):
    """
    Serializer for a node of the tree built by queries.build_comment_tree().

    {
        "comment": { ...redacted comment... },
        "replies": [ ...nested nodes... ]
    }
    """
    comment = CommentSerializer()
    replies = serializers.SerializerMethodField()

    def get_replies(self, obj):
        return CommentTreeSerializer(obj['replies'], many=True).data


# ============================================================================
# LIKES
# ============================================================================

class LikeResultSerializer(serializers.Serializer):
    """Response body of a toggle: the caller's like state and the new count."""
    target = serializers.ChoiceField(choices=LikeTarget.choices)
    target_id = serializers.IntegerField()
    liked_by_user = serializers.BooleanField(source='liked')
    likes = serializers.IntegerField()
