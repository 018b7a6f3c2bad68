"""
Core app views — **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Calling the service with the authenticated user.
2. Serialising the result and returning an HTTP ``Response``.

No model imports, no aggregation logic, no cross-app queries.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiResponse, extend_schema

from .serializers import DashboardStatsSerializer, SystemConstantsSerializer
from .services import DashboardAggregationService, SystemConstantsService


class DashboardStatsView(APIView):
    """
    **GET /api/core/dashboard/**

    Return aggregated crime statistics for the authenticated user.  The
    payload is **role-aware**: admins see system-wide numbers,
    administratives their assigned crimes, civilians the crimes they are
    involved in.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Dashboard statistics",
        responses={200: OpenApiResponse(response=DashboardStatsSerializer, description="Role-scoped statistics.")},
        tags=["System"],
    )
    def get(self, request: Request) -> Response:
        data = DashboardAggregationService(request.user).get_stats()
        serializer = DashboardStatsSerializer(data)
        return Response(serializer.data, status=status.HTTP_200_OK)


class SystemConstantsView(APIView):
    """
    **GET /api/core/constants/**

    Return all system-wide choice enumerations so the frontend can build
    dropdowns and labels without hardcoding values.

    **Authentication**: Not required (``AllowAny``).
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="System constants",
        responses={200: OpenApiResponse(response=SystemConstantsSerializer, description="System constants.")},
        tags=["System"],
    )
    def get(self, request: Request) -> Response:
        data = SystemConstantsService.get_constants()
        serializer = SystemConstantsSerializer(data)
        return Response(serializer.data, status=status.HTTP_200_OK)
