"""
Django Admin Configuration for Forum Models
"""
from django.contrib import admin
from .models import Topic, Post, Comment, PostLike, CommentLike
from .services import mark_deleted


@admin.register(Topic)
class TopicAdmin(admin.ModelAdmin):
    list_display = ['title', 'created_by', 'created_at']
    list_filter = ['created_at']
    search_fields = ['title', 'description', 'created_by__username']
    readonly_fields = ['created_at']


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ['title', 'topic', 'user', 'likes', 'created_at']
    list_filter = ['created_at']
    search_fields = ['title', 'content', 'user__username']
    # likes only moves through services.toggle_like
    readonly_fields = ['likes', 'created_at', 'updated_at']


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['id', 'post', 'user', 'parent_comment', 'likes', 'deleted', 'created_at']
    list_filter = ['deleted', 'created_at']
    search_fields = ['content', 'user__username']
    readonly_fields = ['likes', 'deleted', 'created_at', 'updated_at']
    actions = ['soft_delete']

    @admin.action(description='Mark selected comments as deleted')
    def soft_delete(self, request, queryset):
        for comment_id in queryset.values_list('id', flat=True):
            mark_deleted(comment_id)

    def has_delete_permission(self, request, obj=None):
        # Comments are never physically removed
        return False


class LikeRowAdmin(admin.ModelAdmin):
    """Like rows are view-only; they change only through services.toggle_like."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PostLike)
class PostLikeAdmin(LikeRowAdmin):
    list_display = ['user', 'post', 'created_at']
    search_fields = ['user__username']


@admin.register(CommentLike)
class CommentLikeAdmin(LikeRowAdmin):
    list_display = ['user', 'comment', 'created_at']
    search_fields = ['user__username']
