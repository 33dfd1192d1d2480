from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views import error_response
from marketplace.reviews.api.serializers import (
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewUpdateSerializer,
    SellerReviewPageSerializer,
)
from marketplace.services import ReviewService


PUBLIC_ACTIONS = ("list", "retrieve", "for_seller", "seller_detailed", "written", "for_product")


class ReviewViewSet(viewsets.ViewSet):
    """
    Seller reviews. Reading is public, writing requires a login.
    """

    def get_service(self) -> ReviewService:
        return container.review_service()

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    @extend_schema(
        operation_id="reviews_list",
        summary="List all reviews",
        responses={200: ReviewSerializer(many=True)},
        tags=["Marketplace - Reviews"],
    )
    def list(self, request):
        result = self.get_service().list_reviews()
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reviews_retrieve",
        summary="Get a review",
        responses={
            200: ReviewSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Review not found"),
        },
        tags=["Marketplace - Reviews"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_review(pk)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data)

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a seller",
        description="""
        **What it receives:**
        - `rating` (1-5) and optional `comment`
        - `seller`, and/or the completed `order` being reviewed

        **What it returns:**
        - The review; the seller's rating is recomputed and the seller notified
        """,
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid review"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the buyer of the order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Order not completed or reviewed"),
        },
        tags=["Marketplace - Reviews"],
    )
    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_review(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_update",
        summary="Edit a review (reviewer only)",
        request=ReviewUpdateSerializer,
        responses={
            200: ReviewSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the reviewer"),
        },
        tags=["Marketplace - Reviews"],
    )
    def update(self, request, pk=None):
        serializer = ReviewUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_review(pk, request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @extend_schema(
        operation_id="reviews_destroy",
        summary="Delete a review (reviewer only)",
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the reviewer"),
        },
        tags=["Marketplace - Reviews"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_review(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="reviews_for_seller",
        summary="List reviews received by a seller",
        responses={200: ReviewSerializer(many=True)},
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path=r"user/(?P<seller_id>[^/.]+)")
    def for_seller(self, request, seller_id=None):
        result = self.get_service().list_for_seller(seller_id)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reviews_seller_detailed",
        summary="Paged seller reviews with rating summary",
        parameters=[
            OpenApiParameter(name="page", type=int, description="Zero-based page (default: 0)"),
            OpenApiParameter(name="size", type=int, description="Page size (default: 10)"),
            OpenApiParameter(name="sort", type=str, enum=["recent", "highest", "lowest"], description="Ordering"),
        ],
        responses={
            200: SellerReviewPageSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid paging"),
        },
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path=r"seller/(?P<seller_id>[^/.]+)/detailed")
    def seller_detailed(self, request, seller_id=None):
        try:
            page = int(request.query_params.get("page", 0))
            size = int(request.query_params.get("size", 10))
        except ValueError:
            return Response({"detail": "page and size must be integers"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().seller_detailed(
            seller_id, page=page, size=size, sort=request.query_params.get("sort", "recent")
        )
        if not result.ok:
            return error_response(result)
        return Response(SellerReviewPageSerializer(result.value).data)

    @extend_schema(
        operation_id="reviews_written",
        summary="List reviews written by a user",
        responses={200: ReviewSerializer(many=True)},
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path=r"written/(?P<reviewer_id>[^/.]+)")
    def written(self, request, reviewer_id=None):
        result = self.get_service().list_written(reviewer_id)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reviews_for_product",
        summary="List reviews of a product",
        responses={200: ReviewSerializer(many=True)},
        tags=["Marketplace - Reviews"],
    )
    @action(detail=False, methods=["get"], url_path=r"product/(?P<product_id>[^/.]+)")
    def for_product(self, request, product_id=None):
        result = self.get_service().list_for_product(product_id)
        if not result.ok:
            return error_response(result)
        return Response(ReviewSerializer(result.value, many=True).data)
