from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views import error_response
from marketplace.ordering.api.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from marketplace.services import OrderService


class OrderViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> OrderService:
        return container.order_service()

    def _serialize(self, orders, many=False):
        return OrderSerializer(orders, many=many, context={"request": self.request}).data

    @extend_schema(
        operation_id="orders_list",
        summary="List the caller's orders (as buyer or seller)",
        description="""
        **What it receives:**
        - Authentication token
        - Optional status filter (query param)

        **What it returns:**
        - Orders where the caller is the buyer or the seller, newest first
        - Each order lists the actions available to the caller
        """,
        parameters=[OpenApiParameter(name="status", type=str, description="Filter by order status")],
        responses={200: OrderSerializer(many=True)},
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        result = self.get_service().list_orders(request.user, status=request.query_params.get("status"))
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Get order details",
        responses={
            200: OrderSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the order"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="orders_by_buyer",
        summary="List purchases of a buyer (self only)",
        responses={
            200: OrderSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your purchases"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"], url_path=r"buyer/(?P<buyer_id>[^/.]+)")
    def buyer_orders(self, request, buyer_id=None):
        result = self.get_service().list_buyer_orders(request.user, buyer_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="orders_by_seller",
        summary="List sales of a seller (self only)",
        responses={
            200: OrderSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your sales"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"], url_path=r"seller/(?P<seller_id>[^/.]+)")
    def seller_orders(self, request, seller_id=None):
        result = self.get_service().list_seller_orders(request.user, seller_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="orders_by_product",
        summary="List orders for a product (product seller only)",
        responses={
            200: OrderSerializer(many=True),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the product seller"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=False, methods=["get"], url_path=r"product/(?P<product_id>[^/.]+)")
    def product_orders(self, request, product_id=None):
        result = self.get_service().list_product_orders(request.user, product_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description="""
        **What it receives:**
        - `product` id and `quantity` (default 1)
        - Optional `payment_method`, `pickup_location`, `delivery_notes`

        **What it returns:**
        - The new `pending` order; stock is reserved and the seller is notified
        """,
        request=OrderCreateSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Own product, unavailable or no stock"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_order(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="orders_update_status",
        summary="Change order status",
        description="""
        **What it receives:**
        - `status`: target status
        - `reason`: optional cancellation reason

        **Rules:**
        - pending → confirmed | cancelled
        - confirmed → ready_for_pickup | cancelled
        - ready_for_pickup → completed | cancelled
        - The seller makes every move; the buyer may only cancel a pending order
        """,
        request=OrderStatusUpdateSerializer,
        responses={
            200: OrderSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Move not allowed for the caller"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid transition"),
        },
        tags=["Marketplace - Orders"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = self.get_service().update_status(pk, request.user, data["status"], reason=data.get("reason"))
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="orders_destroy",
        summary="Delete a completed or cancelled order",
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the order"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Order still active"),
        },
        tags=["Marketplace - Orders"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_order(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
