"""
Crimes app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

ViewSets
--------
- ``CrimeViewSet`` — list, report, retrieve, full-replace update, and
  the ``logs`` sub-resource.  There is deliberately no delete.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    CrimeDetailSerializer,
    CrimeFilterSerializer,
    CrimeListSerializer,
    CrimeLogSerializer,
    CrimeReportSerializer,
    CrimeUpdateSerializer,
)
from .services import (
    CrimeLogService,
    CrimeQueryService,
    CrimeReportService,
    CrimeUpdateService,
)


class CrimeViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the crimes app.

    Uses ``viewsets.ViewSet`` (not ``ModelViewSet``) so every action is
    explicitly defined; crimes are never deleted through the API.

    Permission Strategy
    -------------------
    The base permission is ``IsAuthenticated``.  Role scoping and the
    Admin / assigned-Administrative rules are enforced inside the
    service layer.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def _context(self, request: Request) -> dict:
        return {"request": request, "user": request.user}

    # ── Standard CRUD ────────────────────────────────────────────────

    @extend_schema(
        summary="List crimes",
        description=(
            "Crimes visible to the caller: civilians see crimes they reported "
            "or are a victim / accused in, administratives see crimes assigned "
            "to them, admins see everything."
        ),
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Filter by status."),
            OpenApiParameter(name="crime_type", type=str, location=OpenApiParameter.QUERY, description="Filter by crime type (case-insensitive)."),
            OpenApiParameter(name="search", type=str, location=OpenApiParameter.QUERY, description="Search title, type, description, case id and location."),
        ],
        responses={
            200: OpenApiResponse(response=CrimeListSerializer(many=True), description="Role-scoped crimes."),
        },
        tags=["Crimes"],
    )
    def list(self, request: Request) -> Response:
        filter_serializer = CrimeFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        qs = CrimeQueryService.get_filtered_queryset(request.user, filter_serializer.validated_data)
        serializer = CrimeListSerializer(qs, many=True, context=self._context(request))
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Report a crime",
        description="Any authenticated user may report.  The crime starts as Reported.",
        request=CrimeReportSerializer,
        responses={
            201: OpenApiResponse(response=CrimeDetailSerializer, description="Crime reported."),
            400: OpenApiResponse(description="Validation error or unknown accused / victim id."),
        },
        tags=["Crimes"],
    )
    def create(self, request: Request) -> Response:
        serializer = CrimeReportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        crime = CrimeReportService.report_crime(serializer.validated_data, request.user)
        return Response(
            CrimeDetailSerializer(crime, context=self._context(request)).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve crime details",
        responses={
            200: OpenApiResponse(response=CrimeDetailSerializer, description="Crime detail."),
            404: OpenApiResponse(description="Crime not found or not visible."),
        },
        tags=["Crimes"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        crime = CrimeQueryService.get_crime_detail(request.user, pk)
        return Response(
            CrimeDetailSerializer(crime, context=self._context(request)).data,
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        summary="Update a crime (full replace)",
        description=(
            "Replaces title, type, status, description, date, location and the "
            "accused / victim sets, optionally the assignee, and appends one "
            "crime-log entry.  Admins may update any crime; administratives "
            "only crimes assigned to them and cannot change the assignee."
        ),
        request=CrimeUpdateSerializer,
        responses={
            200: OpenApiResponse(response=CrimeDetailSerializer, description="Crime updated."),
            400: OpenApiResponse(description="Validation error or unknown referenced id."),
            403: OpenApiResponse(description="Permission denied."),
            404: OpenApiResponse(description="Crime not found."),
        },
        tags=["Crimes"],
    )
    def update(self, request: Request, pk: str = None) -> Response:
        serializer = CrimeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        crime = CrimeUpdateService.update_crime(pk, serializer.validated_data, request.user)
        return Response(
            CrimeDetailSerializer(crime, context=self._context(request)).data,
            status=status.HTTP_200_OK,
        )

    # ── Sub-resource @actions ────────────────────────────────────────

    @action(detail=True, methods=["get"], url_path="logs")
    @extend_schema(
        summary="Crime log",
        description="Newest-first log of updates on the crime.",
        responses={
            200: OpenApiResponse(response=CrimeLogSerializer(many=True), description="Log entries."),
            404: OpenApiResponse(description="Crime not found or not visible."),
        },
        tags=["Crimes"],
    )
    def logs(self, request: Request, pk: str = None) -> Response:
        entries = CrimeLogService.list_logs(request.user, pk)
        return Response(CrimeLogSerializer(entries, many=True).data, status=status.HTTP_200_OK)
