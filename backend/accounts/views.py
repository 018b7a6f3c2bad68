"""
Accounts app views.

All views follow the **Thin View** pattern: validate input via
serializers, delegate to the service layer, and return the result
wrapped in a DRF ``Response``.  **No business logic** resides here.

View Map
--------
- ``SignupView``             — POST /auth/signup/
- ``LoginView``              — POST /auth/login/
- ``MeView``                 — GET / PATCH /me/
- ``UserSearchView``         — GET /users/?query=
- ``AdministrativeViewSet``  — /administratives/  (list, create)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    AdministrativeCreateSerializer,
    AdministrativeListSerializer,
    LoginRequestSerializer,
    MeUpdateSerializer,
    SignupRequestSerializer,
    TokenResponseSerializer,
    UserDetailSerializer,
    UserSearchSerializer,
    UserSummarySerializer,
)
from .services import (
    AdministrativeService,
    AuthenticationService,
    CurrentUserService,
    UserDirectoryService,
    UserRegistrationService,
)


# ═══════════════════════════════════════════════════════════════════
#  Authentication Views
# ═══════════════════════════════════════════════════════════════════


class SignupView(APIView):
    """
    POST /api/accounts/auth/signup/

    Public endpoint.  Creates a new **civilian** account.

    Request body  → ``SignupRequestSerializer``
    Response body → ``UserDetailSerializer`` (201 Created)
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Sign up as a civilian",
        request=SignupRequestSerializer,
        responses={
            201: OpenApiResponse(response=UserDetailSerializer, description="Account created."),
            400: OpenApiResponse(description="Validation error."),
            409: OpenApiResponse(description="Email already registered."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = SignupRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserRegistrationService.register_civilian(serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST /api/accounts/auth/login/

    Public endpoint.  Checks email, password and the claimed role, and
    issues a one-hour access token.

    Request body  → ``LoginRequestSerializer``
    Response body → ``TokenResponseSerializer`` (200 OK)

    Failures are reported with a specific ``code``: ``MISSING_FIELDS``
    (400), ``USER_NOT_FOUND``, ``INVALID_PASSWORD`` or ``INVALID_ROLE``
    (401).
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Sign in",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=TokenResponseSerializer, description="Signed-in session."),
            400: OpenApiResponse(description="Missing email, password or role."),
            401: OpenApiResponse(description="Unknown user, wrong password or wrong role."),
        },
        tags=["Auth"],
    )
    def post(self, request: Request) -> Response:
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        user = AuthenticationService.authenticate(
            email=data["email"],
            password=data["password"],
            role=data["role"],
        )
        payload = AuthenticationService.generate_token(user)
        payload["user"] = UserDetailSerializer(CurrentUserService.get_profile(user)).data
        return Response(payload, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  Current User ("Me") View
# ═══════════════════════════════════════════════════════════════════


class MeView(APIView):
    """
    GET  /api/accounts/me/  → Retrieve current user profile.
    PATCH /api/accounts/me/ → Update own profile fields.

    GET Response   → ``UserDetailSerializer``
    PATCH Request  → ``MeUpdateSerializer``
    PATCH Response → ``UserDetailSerializer``
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get own profile",
        responses={200: UserDetailSerializer},
        tags=["Profile"],
    )
    def get(self, request: Request) -> Response:
        user = CurrentUserService.get_profile(request.user)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update own profile",
        request=MeUpdateSerializer,
        responses={
            200: UserDetailSerializer,
            400: OpenApiResponse(description="Validation error."),
        },
        tags=["Profile"],
    )
    def patch(self, request: Request) -> Response:
        serializer = MeUpdateSerializer(
            instance=request.user,
            data=request.data,
            partial=True,
        )
        serializer.is_valid(raise_exception=True)
        user = CurrentUserService.update_profile(request.user, serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  User Directory
# ═══════════════════════════════════════════════════════════════════


class UserSearchView(APIView):
    """
    GET /api/accounts/users/?query=<text>&role=<role>

    Search users by first name, last name or email.  Backs the
    accused / victim pickers on the crime forms.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Search users",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Substring of first name, last name or email."),
            OpenApiParameter(name="role", type=str, location=OpenApiParameter.QUERY, description="Restrict to one role."),
        ],
        responses={200: UserSummarySerializer(many=True)},
        tags=["Users"],
    )
    def get(self, request: Request) -> Response:
        params = UserSearchSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        users = UserDirectoryService.search_users(
            params.validated_data.get("query"),
            role=params.validated_data.get("role"),
        )
        return Response(UserSummarySerializer(users, many=True).data, status=status.HTTP_200_OK)


# ═══════════════════════════════════════════════════════════════════
#  Administrative (officer) Management ViewSet
# ═══════════════════════════════════════════════════════════════════


class AdministrativeViewSet(viewsets.ViewSet):
    """
    /api/accounts/administratives/

    Admin-only listing and creation of administrative (police) accounts.
    Role checks live in ``AdministrativeService``.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List administrative users",
        parameters=[
            OpenApiParameter(name="query", type=str, location=OpenApiParameter.QUERY, description="Substring of name or email."),
        ],
        responses={
            200: OpenApiResponse(response=AdministrativeListSerializer(many=True), description="Officers with case counts."),
            403: OpenApiResponse(description="Caller is not an Admin."),
        },
        tags=["Administratives"],
    )
    def list(self, request: Request) -> Response:
        qs = AdministrativeService.list_administratives(
            request.user,
            query=request.query_params.get("query") or None,
        )
        return Response(AdministrativeListSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Create an administrative user",
        request=AdministrativeCreateSerializer,
        responses={
            201: OpenApiResponse(response=UserDetailSerializer, description="Officer account created."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Caller is not an Admin."),
            409: OpenApiResponse(description="Email already registered."),
        },
        tags=["Administratives"],
    )
    def create(self, request: Request) -> Response:
        serializer = AdministrativeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = AdministrativeService.create_administrative(
            serializer.validated_data,
            request.user,
        )
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)
