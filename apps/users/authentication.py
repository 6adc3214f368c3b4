from rest_framework import authentication, exceptions
from rest_framework.authtoken.models import Token


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token auth that also accepts the ``Bearer <key>`` form.

    Older clients send ``Authorization: Bearer <key>``; both keywords map to
    the same ``authtoken`` table.
    """
    model = Token
    keywords = ('Token', 'Bearer')

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].decode().lower() not in {k.lower() for k in self.keywords}:
            return None
        if len(auth) == 1:
            raise exceptions.AuthenticationFailed('Invalid token header. No credentials provided.')
        if len(auth) > 2:
            raise exceptions.AuthenticationFailed('Invalid token header. Token string should not contain spaces.')
        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid token header. Token string should not contain invalid characters.')
        return self.authenticate_credentials(token)
