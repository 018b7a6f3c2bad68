"""
Evidence app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

ViewSets
--------
- ``EvidenceViewSet`` — list by crime, create, retrieve, partial update,
  delete, and the ``bulk-delete`` collection action.
"""

from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)

from .serializers import (
    EvidenceBulkDeleteSerializer,
    EvidenceCreateSerializer,
    EvidenceFilterSerializer,
    EvidenceSerializer,
    EvidenceUpdateSerializer,
)
from .services import EvidenceProcessingService, EvidenceQueryService


class EvidenceViewSet(viewsets.ViewSet):
    """
    Evidence attached to crimes.

    Visibility follows the owning crime; change / delete rights are
    checked in ``EvidenceProcessingService``.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        summary="List evidence of a crime",
        parameters=[
            OpenApiParameter(name="crime", type=int, location=OpenApiParameter.QUERY, required=True, description="PK of the crime."),
        ],
        responses={
            200: OpenApiResponse(response=EvidenceSerializer(many=True), description="Evidence items with base64 images."),
            400: OpenApiResponse(description="Missing or invalid crime id."),
            404: OpenApiResponse(description="Crime not found or not visible."),
        },
        tags=["Evidence"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/evidence/?crime=<id>"""
        filter_serializer = EvidenceFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        qs = EvidenceQueryService.list_for_crime(request.user, filter_serializer.validated_data["crime"])
        return Response(EvidenceSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Add evidence to a crime",
        request=EvidenceCreateSerializer,
        responses={
            201: OpenApiResponse(response=EvidenceSerializer, description="Evidence created."),
            400: OpenApiResponse(description="Validation error (e.g. invalid base64 image)."),
            404: OpenApiResponse(description="Crime not found or not visible."),
        },
        tags=["Evidence"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/evidence/"""
        serializer = EvidenceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        evidence = EvidenceProcessingService.create_evidence(serializer.validated_data, request.user)
        return Response(EvidenceSerializer(evidence).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Retrieve evidence",
        responses={
            200: EvidenceSerializer,
            404: OpenApiResponse(description="Evidence not found or not visible."),
        },
        tags=["Evidence"],
    )
    def retrieve(self, request: Request, pk: int = None) -> Response:
        """GET /api/evidence/{id}/"""
        evidence = EvidenceQueryService.get_evidence_detail(request.user, pk)
        return Response(EvidenceSerializer(evidence).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Partially update evidence",
        description="Only the fields present in the request body are changed.",
        request=EvidenceUpdateSerializer,
        responses={
            200: EvidenceSerializer,
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Not the admin, assigned administrative or submitter."),
            404: OpenApiResponse(description="Evidence not found or not visible."),
        },
        tags=["Evidence"],
    )
    def partial_update(self, request: Request, pk: int = None) -> Response:
        """PATCH /api/evidence/{id}/"""
        serializer = EvidenceUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        evidence = EvidenceProcessingService.update_evidence(pk, serializer.validated_data, request.user)
        return Response(EvidenceSerializer(evidence).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete evidence",
        responses={
            204: OpenApiResponse(description="Deleted."),
            403: OpenApiResponse(description="Not the admin, assigned administrative or submitter."),
            404: OpenApiResponse(description="Evidence not found or not visible."),
        },
        tags=["Evidence"],
    )
    def destroy(self, request: Request, pk: int = None) -> Response:
        """DELETE /api/evidence/{id}/"""
        EvidenceProcessingService.delete_evidence(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="bulk-delete")
    @extend_schema(
        summary="Delete several evidence items of one crime",
        request=EvidenceBulkDeleteSerializer,
        responses={
            200: OpenApiResponse(description="``{\"deleted\": <count>}``"),
            403: OpenApiResponse(description="A targeted item may not be deleted by the caller."),
            404: OpenApiResponse(description="Crime not found or not visible."),
        },
        tags=["Evidence"],
    )
    def bulk_delete(self, request: Request) -> Response:
        """POST /api/evidence/bulk-delete/"""
        serializer = EvidenceBulkDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deleted = EvidenceProcessingService.bulk_delete(
            serializer.validated_data["crime"],
            serializer.validated_data["ids"],
            request.user,
        )
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)
