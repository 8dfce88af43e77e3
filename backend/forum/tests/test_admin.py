"""
Admin tests: like rows and comments can only change through the services.
"""

from django.contrib.auth.models import User
from django.test import TestCase

from forum.models import Topic, Post, Comment, PostLike, CommentLike, LikeTarget
from forum.services import toggle_like


class AdminWriteRulesTestCase(TestCase):

    def setUp(self):
        self.admin_user = User.objects.create_superuser('siteadmin', 'admin@example.com', 'adminpass')
        self.author = User.objects.create_user('author01')
        topic = Topic.objects.create(title='General', description='Talk', created_by=self.author)
        self.post = Post.objects.create(topic=topic, user=self.author, title='Hello', content='World')
        self.comment = Comment.objects.create(post=self.post, user=self.author, content='hello')
        toggle_like(LikeTarget.POST, self.post.id, self.author.id)
        toggle_like(LikeTarget.COMMENT, self.comment.id, self.author.id)
        self.client.force_login(self.admin_user)

    def test_bulk_delete_of_post_likes_is_refused(self):
        like = PostLike.objects.get()
        self.client.post('/admin/forum/postlike/', {
            'action': 'delete_selected',
            '_selected_action': [like.id],
            'post': 'yes',
        })

        self.post.refresh_from_db()
        self.assertEqual(PostLike.objects.count(), 1)
        self.assertEqual(self.post.likes, 1)

    def test_bulk_delete_of_comment_likes_is_refused(self):
        like = CommentLike.objects.get()
        self.client.post('/admin/forum/commentlike/', {
            'action': 'delete_selected',
            '_selected_action': [like.id],
            'post': 'yes',
        })

        self.comment.refresh_from_db()
        self.assertEqual(CommentLike.objects.count(), 1)
        self.assertEqual(self.comment.likes, 1)

    def test_like_delete_view_is_forbidden(self):
        like = PostLike.objects.get()
        response = self.client.post(f'/admin/forum/postlike/{like.id}/delete/', {'post': 'yes'})

        self.assertEqual(response.status_code, 403)
        self.assertTrue(PostLike.objects.filter(id=like.id).exists())

    def test_comment_delete_view_is_forbidden(self):
        response = self.client.post(f'/admin/forum/comment/{self.comment.id}/delete/', {'post': 'yes'})

        self.assertEqual(response.status_code, 403)
        self.assertTrue(Comment.objects.filter(id=self.comment.id).exists())

    def test_soft_delete_action(self):
        self.client.post('/admin/forum/comment/', {
            'action': 'soft_delete',
            '_selected_action': [self.comment.id],
        })

        self.comment.refresh_from_db()
        self.assertTrue(self.comment.deleted)
        self.assertEqual(self.comment.content, 'hello')
