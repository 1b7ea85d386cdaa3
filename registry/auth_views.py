"""
Authentication endpoints.

Sign-up uses the email address as the username.  Login hands out both a
DRF token and a simplejwt pair; either works as a bearer credential on
the registry endpoints.  Session lookup for the actions themselves lives
in :mod:`registry.auth`.
"""
from __future__ import annotations

from django.contrib.auth import authenticate
from django.db import transaction
from rest_framework.authtoken.models import Token
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from .auth import Principal, get_current_session
from .errors import ActionResult, ErrorKind, FieldError
from .models import User
from .serializers.auth import LoginSerializer, RegisterSerializer
from .services.audit import log_action


def _tokens(user) -> dict:
    token_obj, _ = Token.objects.get_or_create(user=user)
    refresh = RefreshToken.for_user(user)
    return {
        'token': token_obj.key,
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': Principal.from_user(user).to_dict(),
    }


def _fail(message: str, field: str | None = None, status: int = 400) -> Response:
    result = ActionResult.fail(ErrorKind.VALIDATION, [FieldError(message, field)])
    return Response(result.to_dict(), status=status)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data

    if User.objects.filter(username=vd['email']).exists():
        return _fail('An account with this email already exists', 'email')

    with transaction.atomic():
        user = User.objects.create_user(username=vd['email'], email=vd['email'],
                                        password=vd['password'], name=vd['name'])
        log_action(user_id=user.id, action='register', object_type='user', object_id=user.id)
    return Response(ActionResult.ok(_tokens(user)).to_dict(), status=201)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']

    user = authenticate(request, username=email, password=s.validated_data['password'])
    if not user:
        # only the attempted email is recorded
        log_action(user_id=None, action='login', object_type='user',
                   detail={'result': 'fail', 'email': email, 'ip': request.META.get('REMOTE_ADDR')})
        return _fail('Invalid email or password')

    log_action(user_id=user.id, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    return Response(ActionResult.ok(_tokens(user)).to_dict(), status=200)


@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    resp = TokenRefreshView.as_view()(request._request)
    if resp.status_code != 200:
        return resp
    data = dict(resp.data)
    data['jwt_access'] = data.pop('access')
    if 'refresh' in data:
        data['jwt_refresh'] = data.pop('refresh')
    return Response(ActionResult.ok(data).to_dict(), status=200)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist the given refresh token, or all of the user's, and drop the legacy token."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
        except TokenError as e:
            return _fail(str(e), 'refresh')
        count = 1
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    Token.objects.filter(user=request.user).delete()
    log_action(user_id=request.user.id, action='logout', object_type='user', object_id=request.user.id,
               detail={'blacklisted': count})
    return Response(ActionResult.ok({'blacklisted': count}).to_dict())


@api_view(['GET'])
@permission_classes([AllowAny])
def session_view(request):
    """The signed-in user, or ``data: null`` when the request carries no credentials."""
    session = get_current_session(request)
    return Response({'success': True, 'data': session.to_dict() if session else None})
