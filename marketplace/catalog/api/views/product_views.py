from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views import error_response
from marketplace.catalog.api.serializers import LikeStatusSerializer, ProductSerializer, ProductWriteSerializer
from marketplace.services import CatalogService


PUBLIC_ACTIONS = ("list", "retrieve", "search", "seller_products")


class ProductViewSet(viewsets.ViewSet):
    """
    Product catalog.

    Browsing is public; creating, editing, removing and liking require a login.
    """

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def _serialize(self, products, many=False):
        return ProductSerializer(products, many=many, context={"request": self.request}).data

    @extend_schema(
        operation_id="products_list",
        summary="List available products",
        description="""
        **What it receives:**
        - Optional `category` filter (id or name)

        **What it returns:**
        - Available products, newest first
        """,
        parameters=[OpenApiParameter(name="category", type=str, description="Category id or name")],
        responses={200: ProductSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        result = self.get_service().list_products(category=request.query_params.get("category"))
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product details",
        description="Counts as a view of the product.",
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk, track_view=True)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="products_by_seller",
        summary="List a seller's products",
        parameters=[
            OpenApiParameter(name="available", type=bool, description="Only available (true) or removed (false)")
        ],
        responses={200: ProductSerializer(many=True)},
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"], url_path=r"seller/(?P<seller_id>[^/.]+)")
    def seller_products(self, request, seller_id=None):
        available = request.query_params.get("available")
        if available is not None:
            available = available.lower() == "true"

        result = self.get_service().list_seller_products(seller_id, available=available)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="products_search",
        summary="Search available products",
        parameters=[OpenApiParameter(name="q", type=str, required=True, description="Search term")],
        responses={
            200: ProductSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing search term"),
        },
        tags=["Marketplace - Products"],
    )
    @action(detail=False, methods=["get"])
    def search(self, request):
        result = self.get_service().search_products(request.query_params.get("q", ""))
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="products_create",
        summary="Create a product",
        description="""
        **What it receives:**
        - Product fields; `images` as `[{image_url, is_primary}]`
        - `price` may be omitted only when `trade_only` is true

        **What it returns:**
        - The created product, owned by the caller
        """,
        request=ProductWriteSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_product(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_update",
        summary="Update a product (owner only)",
        description="Supplying `images` replaces the whole image set.",
        request=ProductWriteSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def update(self, request, pk=None, partial=False):
        serializer = ProductWriteSerializer(data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_product(pk, request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="products_partial_update",
        summary="Partially update a product (owner only)",
        request=ProductWriteSerializer,
        responses={200: ProductSerializer},
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    @extend_schema(
        operation_id="products_destroy",
        summary="Remove a product (owner only)",
        description="The product is marked unavailable and its likes are dropped.",
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not product owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="products_like",
        summary="Toggle like on a product",
        request=None,
        responses={200: LikeStatusSerializer},
        tags=["Marketplace - Products"],
    )
    @action(detail=True, methods=["post"])
    def like(self, request, pk=None):
        result = self.get_service().toggle_like(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="products_liked",
        summary="Whether the caller likes a product",
        responses={200: LikeStatusSerializer},
        tags=["Marketplace - Products"],
    )
    @action(detail=True, methods=["get"])
    def liked(self, request, pk=None):
        result = self.get_service().is_liked(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response({"liked": result.value})
