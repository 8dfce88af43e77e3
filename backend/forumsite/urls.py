"""
Forum URL Configuration
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def api_root(request):
    """Root endpoint with API information."""
    return JsonResponse({
        'message': 'Forum API Server',
        'version': '1.0',
        'endpoints': {
            'users': '/api/users/',
            'topics': '/api/topics/',
            'posts': '/api/posts/',
            'comments': '/api/comments/',
            'like': '/api/<posts|comments>/<id>/like/',
            'search': '/api/search/?q=',
        },
        'admin': '/admin/',
    })


urlpatterns = [
    path('', api_root, name='api-root'),
    path('admin/', admin.site.urls),
    path('api/', include('forum.urls')),
]
