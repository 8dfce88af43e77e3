"""
DRF Views
=========

API endpoints for the forum.

AUTHENTICATION NOTE:
--------------------
Login is by username only and starts a Django session. Anonymous
requests may read everything; any write needs a session.

Views never look the current user up implicitly inside the core: they
compute `viewer_id` (an int, or None for anonymous) and pass it to the
query helpers and services.
"""

import logging

from django.contrib.auth import login, logout
from django.contrib.auth.models import User
from rest_framework import generics, permissions, status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.pagination import CursorPagination, LimitOffsetPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import ResourceNotFound, UsernameTaken
from .models import Topic, Post
from .permissions import IsOwnerOrReadOnly
from .queries import (
    topics_with_post_count,
    posts_for_viewer,
    comments_for_viewer,
    get_all_comments_for_post,
    build_comment_tree,
    search_posts,
    search_topics,
)
from .serializers import (
    UserSerializer,
    UsernameSerializer,
    RegisterSerializer,
    TopicSerializer,
    PostSerializer,
    PostWriteSerializer,
    CommentSerializer,
    CommentCreateSerializer,
    CommentUpdateSerializer,
    CommentTreeSerializer,
    LikeResultSerializer,
)
from .services import toggle_like, mark_deleted

logger = logging.getLogger(__name__)


def viewer_id(request):
    """The requester's user id, or None for an anonymous viewer."""
    return request.user.id if request.user.is_authenticated else None


class FeedPagination(CursorPagination):
    """Cursor pagination for the all-posts feed, newest first."""
    page_size = 20
    ordering = '-created_at'
    cursor_query_param = 'cursor'


class TopicBatchPagination(LimitOffsetPagination):
    """
    ?size=10&offset=20 returns topics 21-30.

    Without `size` the full list is returned unpaginated.
    """
    limit_query_param = 'size'
    offset_query_param = 'offset'
    max_limit = 100


class OwnedObjectMixin:
    """
    Looks the object up by the URL id. A missing id is a ResourceNotFound
    (404); only an existing object reaches the ownership check (403).
    """
    resource_kind = None

    def get_object(self):
        object_id = self.kwargs[self.lookup_url_kwarg]
        obj = self.get_queryset().filter(pk=object_id).first()
        if obj is None:
            raise ResourceNotFound(self.resource_kind, object_id)
        self.check_object_permissions(self.request, obj)
        return obj


class ReadBackMixin:
    """
    Writes are validated by the write serializer but answered with the
    read serializer, so clients always get the same shape back.
    """
    read_serializer_class = None
    write_serializer_class = None

    def get_serializer_class(self):
        if self.request.method in permissions.SAFE_METHODS:
            return self.read_serializer_class
        return self.write_serializer_class

    def read_representation(self, instance):
        return self.read_serializer_class(instance, context=self.get_serializer_context()).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return Response(self.read_representation(serializer.instance), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        # get_object() raises 404, then 403 for non-owners, before validation
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response(self.read_representation(serializer.instance))


# ============================================================================
# USERS
# ============================================================================

class RegisterView(APIView):
    """
    POST /api/users/register/

    Body: { "username": "someone1" }
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        username = serializer.validated_data['username']

        if User.objects.filter(username=username).exists():
            raise UsernameTaken()

        user = User.objects.create_user(username=username)
        logger.info("Registered user %s (id=%s)", username, user.id)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/users/login/

    Starts a session for an existing username.
    """
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = UsernameSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects.filter(username=serializer.validated_data['username']).first()
        if user is None:
            raise NotFound('User not found, please register.')

        login(request, user)
        return Response(UserSerializer(user).data)


class LogoutView(APIView):
    """POST /api/users/logout/"""
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    """GET /api/users/me/"""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class UserDetailView(generics.RetrieveAPIView):
    """GET /api/users/<user_id>/"""
    serializer_class = UserSerializer
    permission_classes = [permissions.AllowAny]
    queryset = User.objects.all()
    lookup_url_kwarg = 'user_id'


# ============================================================================
# TOPICS
# ============================================================================

class TopicListCreateView(ReadBackMixin, generics.ListCreateAPIView):
    """
    GET  /api/topics/            all topics with post_count
    GET  /api/topics/?size=&offset=
    POST /api/topics/            { "title": ..., "description": ... }
    """
    read_serializer_class = TopicSerializer
    write_serializer_class = TopicSerializer
    pagination_class = TopicBatchPagination

    def get_queryset(self):
        return topics_with_post_count()

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


class TopicDetailView(OwnedObjectMixin, ReadBackMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET    /api/topics/<topic_id>/
    PUT    /api/topics/<topic_id>/   owner only
    DELETE /api/topics/<topic_id>/   owner only, removes its posts too
    """
    read_serializer_class = TopicSerializer
    write_serializer_class = TopicSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    owner_field = 'created_by_id'
    lookup_url_kwarg = 'topic_id'
    resource_kind = 'topic'
    http_method_names = ['get', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        return topics_with_post_count()

    def perform_destroy(self, instance):
        logger.info("Deleting topic %s", instance.id)
        instance.delete()


class TopicPostsView(generics.ListAPIView):
    """GET /api/topics/<topic_id>/posts/"""
    serializer_class = PostSerializer
    permission_classes = [permissions.AllowAny]

    def get_queryset(self):
        topic_id = self.kwargs['topic_id']
        if not Topic.objects.filter(id=topic_id).exists():
            raise ResourceNotFound('topic', topic_id)
        return posts_for_viewer(viewer_id(self.request)).filter(topic_id=topic_id)


# ============================================================================
# POSTS
# ============================================================================

class PostListCreateView(ReadBackMixin, generics.ListCreateAPIView):
    """
    GET  /api/posts/    feed of all posts, cursor-paginated
    POST /api/posts/    { "topic_id": 1, "title": ..., "content": ... }
    """
    read_serializer_class = PostSerializer
    write_serializer_class = PostWriteSerializer
    pagination_class = FeedPagination

    def get_queryset(self):
        return posts_for_viewer(viewer_id(self.request))

    def perform_create(self, serializer):
        # Owner comes from the session, never from the request body
        serializer.save(user=self.request.user)


class PostDetailView(OwnedObjectMixin, ReadBackMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET    /api/posts/<post_id>/
    PUT    /api/posts/<post_id>/   owner only, { "title": ..., "content": ... }
    DELETE /api/posts/<post_id>/   owner only, hard delete
    """
    read_serializer_class = PostSerializer
    write_serializer_class = PostWriteSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    owner_field = 'user_id'
    lookup_url_kwarg = 'post_id'
    resource_kind = 'post'
    http_method_names = ['get', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        return posts_for_viewer(viewer_id(self.request))

    def perform_destroy(self, instance):
        logger.info("Deleting post %s", instance.id)
        instance.delete()


class PostCommentsView(generics.ListAPIView):
    """
    GET /api/posts/<post_id>/comments/

    Every comment of the post, flat, oldest first. Deleted comments are
    included in redacted form so replies keep their place in the thread.
    """
    serializer_class = CommentSerializer
    permission_classes = [permissions.AllowAny]

    def get_queryset(self):
        post_id = self.kwargs['post_id']
        if not Post.objects.filter(id=post_id).exists():
            raise ResourceNotFound('post', post_id)
        return comments_for_viewer(viewer_id(self.request)).filter(post_id=post_id)


class PostCommentTreeView(APIView):
    """
    GET /api/posts/<post_id>/comments/tree/

    Same comments as the flat list, nested by parent_comment_id.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, post_id):
        if not Post.objects.filter(id=post_id).exists():
            raise ResourceNotFound('post', post_id)

        flat_comments = get_all_comments_for_post(post_id, viewer_id(request))
        comment_tree = build_comment_tree(flat_comments)
        return Response(CommentTreeSerializer(comment_tree, many=True).data)


# ============================================================================
# COMMENTS
# ============================================================================

class CommentCreateView(ReadBackMixin, generics.CreateAPIView):
    """
    POST /api/comments/

    Body:
    {
        "post_id": 1,
        "content": "Comment text",
        "parent_comment_id": 123  // optional, for replies
    }
    """
    read_serializer_class = CommentSerializer
    write_serializer_class = CommentCreateSerializer
    permission_classes = [permissions.IsAuthenticated]

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)


class CommentDetailView(OwnedObjectMixin, ReadBackMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    GET    /api/comments/<comment_id>/   redacted if deleted
    PUT    /api/comments/<comment_id>/   owner only, { "content": ... }
    DELETE /api/comments/<comment_id>/   owner only, soft delete
    """
    read_serializer_class = CommentSerializer
    write_serializer_class = CommentUpdateSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    owner_field = 'user_id'
    lookup_url_kwarg = 'comment_id'
    resource_kind = 'comment'
    http_method_names = ['get', 'put', 'delete', 'head', 'options']

    def get_queryset(self):
        return comments_for_viewer(viewer_id(self.request))

    def perform_destroy(self, instance):
        mark_deleted(instance.id)


# ============================================================================
# LIKES
# ============================================================================

class LikeToggleView(APIView):
    """
    POST /api/posts/<pk>/like/
    POST /api/comments/<pk>/like/

    Toggles the caller's like. Returns:
    {
        "target": "post" | "comment",
        "target_id": 123,
        "liked_by_user": true | false,
        "likes": 7
    }
    """
    permission_classes = [permissions.IsAuthenticated]
    target = None

    def post(self, request, pk):
        result = toggle_like(self.target, pk, request.user.id)
        return Response(LikeResultSerializer(result).data)


# ============================================================================
# SEARCH
# ============================================================================

class SearchView(APIView):
    """
    GET /api/search/?q=term

    Posts and topics whose title or body contains the term.
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        term = request.query_params.get('q', '').strip()
        if not term:
            raise ValidationError({'q': "Query parameter 'q' is required."})

        context = {'request': request}
        return Response({
            'posts': PostSerializer(search_posts(term, viewer_id(request)), many=True, context=context).data,
            'topics': TopicSerializer(search_topics(term), many=True, context=context).data,
        })
