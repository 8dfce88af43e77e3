from io import StringIO

from django.contrib.auth.models import User
from django.core.management import call_command
from django.db.models import Count
from django.test import TestCase

from forum.models import Topic, Post, Comment


class SeedDataCommandTestCase(TestCase):

    def seed(self, **options):
        out = StringIO()
        call_command('seed_data', stdout=out, **options)
        return out.getvalue()

    def test_counters_match_like_rows(self):
        output = self.seed(users=6, topics=2, posts=5, comments=25)

        self.assertIn('Successfully created', output)
        self.assertEqual(Topic.objects.count(), 2)
        self.assertEqual(Post.objects.count(), 5)
        self.assertEqual(Comment.objects.count(), 25)

        for post in Post.objects.annotate(rows=Count('like_rows')):
            self.assertEqual(post.likes, post.rows)
        for comment in Comment.objects.annotate(rows=Count('like_rows')):
            self.assertEqual(comment.likes, comment.rows)

    def test_replies_stay_on_their_post(self):
        self.seed(users=4, topics=1, posts=3, comments=30)

        for reply in Comment.objects.filter(parent_comment__isnull=False).select_related('parent_comment'):
            self.assertEqual(reply.post_id, reply.parent_comment.post_id)

    def test_usernames_are_valid(self):
        self.seed(users=3, topics=1, posts=1, comments=0)

        for user in User.objects.all():
            self.assertTrue(7 <= len(user.username) <= 15)

    def test_clear_replaces_existing_data(self):
        self.seed(users=3, topics=2, posts=4, comments=5)
        self.seed(users=3, topics=1, posts=2, comments=3, clear=True)

        self.assertEqual(Topic.objects.count(), 1)
        self.assertEqual(Post.objects.count(), 2)
        self.assertEqual(Comment.objects.count(), 3)
        self.assertEqual(User.objects.count(), 3)
