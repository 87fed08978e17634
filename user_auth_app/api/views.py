"""Auth API views.

Thin HTTP wrappers around `SessionContext`. Every auth operation answers
with `{"success": bool, "error": str}`; failures are 400 responses with a
readable message, never exceptions.
"""

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from profiles.api.permissions import IsAdminRole
from profiles.api.serializers import ProfileSerializer
from ..session import SessionContext
from .permissions import AllowAnyRegistration, AllowedAnyLogin
from .serializers import (
    AdminUserCreateSerializer,
    LoginSerializer,
    PasswordChangeSerializer,
    RegistrationSerializer,
)


def _result_response(result, success_status=status.HTTP_200_OK, **extra):
    if not result.success:
        return Response(result.as_dict(), status=status.HTTP_400_BAD_REQUEST)
    return Response({**result.as_dict(), **extra}, status=success_status)


def _session_payload(session: SessionContext) -> dict:
    return {
        "state": session.state,
        "user": ProfileSerializer(session.profile).data if session.profile else None,
    }


class RegistrationView(APIView):
    """POST /api/registration/ -> create identity + profile with role 'user'."""

    permission_classes = [AllowAnyRegistration]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        with SessionContext(request) as session:
            result = session.sign_up(data["name"], data["email"], data["address"], data["password"])
        return _result_response(
            result,
            status.HTTP_201_CREATED,
            user_id=result.user_id,
            email=data["email"],
            name=data["name"],
        )


class LoginView(APIView):
    """POST /api/login/ -> validate credentials, start a session and return a token."""

    permission_classes = [AllowedAnyLogin]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with SessionContext(request) as session:
            result = session.sign_in(
                serializer.validated_data["email"], serializer.validated_data["password"]
            )
            payload = _session_payload(session)
        return _result_response(result, token=result.token, user_id=result.user_id, **payload)


class LogoutView(APIView):
    """POST /api/logout/ -> end the session and revoke the token."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        with SessionContext(request) as session:
            result = session.sign_out()
        return _result_response(result)


class PasswordChangeView(APIView):
    """POST /api/password/ -> set a new password for the signed-in identity."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = PasswordChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with SessionContext(request) as session:
            result = session.change_password(serializer.validated_data["new_password"])
        return _result_response(result)


class SessionView(APIView):
    """GET /api/session/ -> current session state and profile (or anonymous)."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        with SessionContext(request) as session:
            payload = _session_payload(session)
        return Response(payload, status=status.HTTP_200_OK)


class AdminUserCreateView(APIView):
    """POST /api/users/ -> admin creates an identity with an explicit role."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def post(self, request, *args, **kwargs):
        serializer = AdminUserCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        with SessionContext(request) as session:
            result = session.create_identity_with_role(
                data["name"], data["email"], data["address"], data["password"], data["role"]
            )
        return _result_response(
            result,
            status.HTTP_201_CREATED,
            user_id=result.user_id,
            email=data["email"],
            role=data["role"],
        )
