"""
Tests for the ownership guard, comment redaction and thread building.
"""

from django.contrib.auth.models import User
from django.test import SimpleTestCase, TestCase

from forum.models import Topic, Post, Comment
from forum.permissions import authorize
from forum.queries import get_all_comments_for_post, build_comment_tree
from forum.redaction import redact_comment, DELETED_CONTENT, REDACTED_USERNAME
from forum.services import mark_deleted


class AuthorizeTestCase(SimpleTestCase):

    def test_owner_is_allowed(self):
        self.assertTrue(authorize(5, 5))

    def test_other_user_is_refused(self):
        self.assertFalse(authorize(5, 6))

    def test_anonymous_is_refused(self):
        self.assertFalse(authorize(5, None))


class RedactCommentTestCase(SimpleTestCase):

    def _comment(self, **overrides):
        data = {
            'id': 12,
            'content': 'hello',
            'likes': 3,
            'created_at': '2024-01-01T10:00:00Z',
            'updated_at': '2024-01-02T10:00:00Z',
            'post_id': 4,
            'user_id': 7,
            'deleted': False,
            'parent_comment_id': 9,
            'liked_by_user': True,
            'created_by_username': 'someone1',
        }
        data.update(overrides)
        return data

    def test_live_comment_is_unchanged(self):
        comment = self._comment()
        self.assertEqual(redact_comment(comment), self._comment())

    def test_deleted_comment_is_masked(self):
        redacted = redact_comment(self._comment(deleted=True))

        self.assertEqual(redacted['content'], DELETED_CONTENT)
        self.assertEqual(redacted['created_by_username'], REDACTED_USERNAME)
        self.assertEqual(redacted['likes'], 0)

    def test_placeholders_match_existing_clients(self):
        redacted = redact_comment(self._comment(deleted=True))

        self.assertEqual(redacted['content'], '[Deleted]')
        self.assertEqual(redacted['created_by_username'], '[Redacted]')

    def test_deleted_comment_keeps_thread_fields(self):
        original = self._comment(deleted=True)
        redacted = redact_comment(original)

        for field in ('id', 'post_id', 'user_id', 'parent_comment_id',
                      'created_at', 'updated_at', 'liked_by_user', 'deleted'):
            self.assertEqual(redacted[field], original[field], field)

    def test_input_is_not_modified(self):
        original = self._comment(deleted=True)
        redact_comment(original)
        self.assertEqual(original['content'], 'hello')
        self.assertEqual(original['likes'], 3)


class CommentTreeTestCase(TestCase):

    def setUp(self):
        self.user = User.objects.create_user('author01')
        topic = Topic.objects.create(title='General', description='Talk', created_by=self.user)
        self.post = Post.objects.create(topic=topic, user=self.user, title='Test', content='Content')

    def test_tree_building_single_level(self):
        c1 = Comment.objects.create(post=self.post, user=self.user, content='Comment 1')
        c2 = Comment.objects.create(post=self.post, user=self.user, content='Comment 2')

        tree = build_comment_tree(get_all_comments_for_post(self.post.id))

        self.assertEqual([node['comment'].id for node in tree], [c1.id, c2.id])

    def test_tree_building_nested(self):
        c1 = Comment.objects.create(post=self.post, user=self.user, content='Comment 1')
        c2 = Comment.objects.create(post=self.post, user=self.user, content='Reply', parent_comment=c1)
        c3 = Comment.objects.create(post=self.post, user=self.user, content='Reply to reply', parent_comment=c2)

        tree = build_comment_tree(get_all_comments_for_post(self.post.id))

        self.assertEqual(len(tree), 1)
        self.assertEqual(tree[0]['replies'][0]['comment'].id, c2.id)
        self.assertEqual(tree[0]['replies'][0]['replies'][0]['comment'].id, c3.id)

    def test_deleted_parent_keeps_its_replies(self):
        parent = Comment.objects.create(post=self.post, user=self.user, content='Parent')
        reply = Comment.objects.create(post=self.post, user=self.user, content='Reply', parent_comment=parent)
        mark_deleted(parent.id)

        tree = build_comment_tree(get_all_comments_for_post(self.post.id))

        self.assertEqual(tree[0]['comment'].id, parent.id)
        self.assertTrue(tree[0]['comment'].deleted)
        self.assertEqual(tree[0]['replies'][0]['comment'].id, reply.id)

    def test_whole_thread_is_one_query(self):
        parent = None
        for i in range(30):
            parent = Comment.objects.create(
                post=self.post, user=self.user, content=f'Comment {i}',
                parent_comment=parent if i % 3 else None
            )

        with self.assertNumQueries(1):
            flat = get_all_comments_for_post(self.post.id)
            tree = build_comment_tree(flat)
            usernames = [node['comment'].user.username for node in tree]

        self.assertEqual(len(flat), 30)
        self.assertEqual(len(usernames), 10)
