"""Test harness configuration.

The production staticfiles backend needs a `collectstatic` manifest before
admin pages can render; tests use the plain storage so they run without it.
"""


def pytest_configure(config):
    from django.conf import settings

    settings.STORAGES = {
        **settings.STORAGES,
        'staticfiles': {
            'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
        },
    }
