"""
Session authentication for the API.

Anonymous writes get 401 with a WWW-Authenticate header; 403 is left for
non-owners.
"""
from rest_framework.authentication import SessionAuthentication


class ForumSessionAuthentication(SessionAuthentication):

    def authenticate_header(self, request):
        return 'Session'
