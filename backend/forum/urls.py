"""
Forum App URL Configuration
"""
from django.urls import path

from .models import LikeTarget
from .views import (
    RegisterView,
    LoginView,
    LogoutView,
    MeView,
    UserDetailView,
    TopicListCreateView,
    TopicDetailView,
    TopicPostsView,
    PostListCreateView,
    PostDetailView,
    PostCommentsView,
    PostCommentTreeView,
    CommentCreateView,
    CommentDetailView,
    LikeToggleView,
    SearchView,
)

urlpatterns = [
    # Users
    path('users/register/', RegisterView.as_view(), name='user-register'),
    path('users/login/', LoginView.as_view(), name='user-login'),
    path('users/logout/', LogoutView.as_view(), name='user-logout'),
    path('users/me/', MeView.as_view(), name='user-me'),
    path('users/<int:user_id>/', UserDetailView.as_view(), name='user-detail'),

    # Topics
    path('topics/', TopicListCreateView.as_view(), name='topic-list'),
    path('topics/<int:topic_id>/', TopicDetailView.as_view(), name='topic-detail'),
    path('topics/<int:topic_id>/posts/', TopicPostsView.as_view(), name='topic-posts'),

    # Posts
    path('posts/', PostListCreateView.as_view(), name='post-list'),
    path('posts/<int:post_id>/', PostDetailView.as_view(), name='post-detail'),
    path('posts/<int:post_id>/comments/', PostCommentsView.as_view(), name='post-comments'),
    path('posts/<int:post_id>/comments/tree/', PostCommentTreeView.as_view(), name='post-comment-tree'),
    path('posts/<int:pk>/like/', LikeToggleView.as_view(target=LikeTarget.POST), name='like-post'),

    # Comments
    path('comments/', CommentCreateView.as_view(), name='comment-create'),
    path('comments/<int:comment_id>/', CommentDetailView.as_view(), name='comment-detail'),
    path('comments/<int:pk>/like/', LikeToggleView.as_view(target=LikeTarget.COMMENT), name='like-comment'),

    # Search
    path('search/', SearchView.as_view(), name='search'),
]
