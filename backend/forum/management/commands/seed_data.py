"""
Management command to seed the database with sample forum data.

Usage: python manage.py seed_data
"""

import random
from datetime import timedelta
from django.core.management.base import BaseCommand
from django.contrib.auth.models import User
from django.utils import timezone

from forum.models import Topic, Post, Comment, PostLike, CommentLike, LikeTarget
from forum.services import toggle_like, mark_deleted


class Command(BaseCommand):
    help = 'Seed the database with sample forum data for testing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--users',
            type=int,
            default=10,
            help='Number of users to create'
        )
        parser.add_argument(
            '--topics',
            type=int,
            default=5,
            help='Number of topics to create'
        )
        parser.add_argument(
            '--posts',
            type=int,
            default=20,
            help='Number of posts to create'
        )
        parser.add_argument(
            '--comments',
            type=int,
            default=100,
            help='Number of comments to create'
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before seeding'
        )

    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            CommentLike.objects.all().delete()
            PostLike.objects.all().delete()
            Comment.objects.all().delete()
            Post.objects.all().delete()
            Topic.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()

        self.stdout.write('Creating users...')
        users = self._create_users(options['users'])

        self.stdout.write('Creating topics...')
        topics = self._create_topics(users, options['topics'])

        self.stdout.write('Creating posts...')
        posts = self._create_posts(users, topics, options['posts'])

        self.stdout.write('Creating comments...')
        comments = self._create_comments(users, posts, options['comments'])

        self.stdout.write('Creating likes...')
        like_count = self._create_likes(users, posts, comments)

        self.stdout.write('Deleting a few comments...')
        deleted = self._delete_some_comments(comments)

        self.stdout.write(self.style.SUCCESS(
            f'Successfully created:\n'
            f'  - {len(users)} users\n'
            f'  - {len(topics)} topics\n'
            f'  - {len(posts)} posts\n'
            f'  - {len(comments)} comments ({deleted} soft-deleted)\n'
            f'  - {like_count} likes'
        ))

    def _create_users(self, count):
        users = []
        for i in range(count):
            # 7-15 characters, no whitespace
            username = f'member{i+1:03d}'
            user = User.objects.filter(username=username).first()
            if user is None:
                user = User.objects.create_user(username=username)
            users.append(user)
        return users

    def _create_topics(self, users, count):
        subjects = [
            ("General", "Anything that does not fit elsewhere."),
            ("Announcements", "News about the forum itself."),
            ("Help", "Ask the community for help."),
            ("Projects", "Show what you are working on."),
            ("Off-topic", "Everything else."),
        ]
        topics = []
        for i in range(count):
            title, description = subjects[i % len(subjects)]
            topics.append(Topic.objects.create(
                title=f"{title} #{i+1}",
                description=description,
                created_by=random.choice(users),
                created_at=timezone.now() - timedelta(days=random.randint(1, 30))
            ))
        return topics

    def _create_posts(self, users, topics, count):
        posts = []
        titles = [
            "Just discovered this amazing trick!",
            "What do you think about...",
            "Help needed with a problem",
            "Check out my latest project",
            "Question for the community",
        ]

        contents = [
            "I've been working on this for a while and wanted to share my thoughts with the community.",
            "Has anyone else experienced this? I'd love to hear your perspectives.",
            "Here's what I learned after years of experience in this field.",
        ]

        for i in range(count):
            post = Post.objects.create(
                topic=random.choice(topics),
                user=random.choice(users),
                title=f"{random.choice(titles)} #{i+1}",
                content=random.choice(contents),
                created_at=timezone.now() - timedelta(hours=random.randint(0, 48))
            )
            posts.append(post)
        return posts

    def _create_comments(self, users, posts, count):
        comments = []
        comment_texts = [
            "Great point! I totally agree.",
            "Hmm, I'm not sure about this...",
            "Thanks for sharing!",
            "Can you elaborate on this?",
            "I have a different perspective on this.",
            "Well said!",
        ]

        for i in range(count):
            post = random.choice(posts)

            # 30% chance of being a reply to an earlier comment on the same post
            parent = None
            existing_comments = [c for c in comments if c.post_id == post.id]
            if existing_comments and random.random() < 0.3:
                parent = random.choice(existing_comments)

            comment = Comment.objects.create(
                post=post,
                user=random.choice(users),
                parent_comment=parent,
                content=random.choice(comment_texts),
            )
            comments.append(comment)

        return comments

    def _create_likes(self, users, posts, comments):
        # Each sampled user toggles once, so every toggle lands as a like
        total = 0
        for post in posts:
            likers = random.sample(users, k=random.randint(0, len(users)))
            for liker in likers:
                toggle_like(LikeTarget.POST, post.id, liker.id)
            total += len(likers)

        for comment in comments:
            if random.random() < 0.3:
                likers = random.sample(users, k=min(3, len(users)))
                for liker in likers:
                    toggle_like(LikeTarget.COMMENT, comment.id, liker.id)
                total += len(likers)
        return total

    def _delete_some_comments(self, comments):
        deleted = 0
        for comment in comments:
            if random.random() < 0.1:
                mark_deleted(comment.id)
                deleted += 1
        return deleted
