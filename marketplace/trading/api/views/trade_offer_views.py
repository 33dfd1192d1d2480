from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.api.views import error_response
from marketplace.services import TradeOfferService
from marketplace.trading.api.serializers import (
    TradeOfferCreateSerializer,
    TradeOfferSerializer,
    TradeOfferStatusSerializer,
)


class TradeOfferViewSet(viewsets.ViewSet):
    """
    Trade offers between a product's seller and the users bidding on it.
    """

    permission_classes = [IsAuthenticated]

    def get_service(self) -> TradeOfferService:
        return container.trade_offer_service()

    def _serialize(self, offers, many=False):
        return TradeOfferSerializer(offers, many=many, context={"request": self.request}).data

    @extend_schema(
        operation_id="tradeoffers_list",
        summary="List offers the caller made or received",
        responses={200: TradeOfferSerializer(many=True)},
        tags=["Marketplace - Trade Offers"],
    )
    def list(self, request):
        result = self.get_service().list_offers(request.user)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="tradeoffers_retrieve",
        summary="Get trade offer details",
        responses={
            200: TradeOfferSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the offer"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Offer not found"),
        },
        tags=["Marketplace - Trade Offers"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_offer(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="tradeoffers_received",
        summary="List offers received by a seller (self only)",
        responses={200: TradeOfferSerializer(many=True)},
        tags=["Marketplace - Trade Offers"],
    )
    @action(detail=False, methods=["get"], url_path=r"seller/(?P<seller_id>[^/.]+)")
    def received(self, request, seller_id=None):
        result = self.get_service().list_received(request.user, seller_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="tradeoffers_made",
        summary="List offers made by a user (self only)",
        responses={200: TradeOfferSerializer(many=True)},
        tags=["Marketplace - Trade Offers"],
    )
    @action(detail=False, methods=["get"], url_path=r"offerer/(?P<offerer_id>[^/.]+)")
    def made(self, request, offerer_id=None):
        result = self.get_service().list_made(request.user, offerer_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="tradeoffers_by_product",
        summary="List offers on a product",
        description="The product's seller sees every offer; anyone else sees only their own.",
        responses={200: TradeOfferSerializer(many=True)},
        tags=["Marketplace - Trade Offers"],
    )
    @action(detail=False, methods=["get"], url_path=r"product/(?P<product_id>[^/.]+)")
    def for_product(self, request, product_id=None):
        result = self.get_service().list_for_product(request.user, product_id)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value, many=True))

    @extend_schema(
        operation_id="tradeoffers_create",
        summary="Make a trade offer",
        description="""
        **What it receives:**
        - `product` id
        - The offered item (`item_name`, `item_estimated_value`, `item_condition`,
          `item_image_url`), `trade_description` and optional `cash_component`
        - `offered_price` (defaults to the item's estimated value, else 0)

        **What it returns:**
        - The new `PENDING` offer; the seller is notified
        """,
        request=TradeOfferCreateSerializer,
        responses={
            201: TradeOfferSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Own product or unavailable"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Marketplace - Trade Offers"],
    )
    def create(self, request):
        serializer = TradeOfferCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create_offer(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value), status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="tradeoffers_update_status",
        summary="Accept, reject or withdraw an offer",
        description="""
        **Rules:**
        - PENDING → ACCEPTED | REJECTED (product seller)
        - PENDING → WITHDRAWN (offerer)
        - Status strings are case-insensitive
        """,
        request=TradeOfferStatusSerializer,
        responses={
            200: TradeOfferSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Move not allowed for the caller"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid transition"),
        },
        tags=["Marketplace - Trade Offers"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = TradeOfferStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update_status(pk, request.user, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)
        return Response(self._serialize(result.value))

    @extend_schema(
        operation_id="tradeoffers_destroy",
        summary="Delete a finished offer",
        responses={
            204: None,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a party to the offer"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Offer still pending"),
        },
        tags=["Marketplace - Trade Offers"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_offer(pk, request.user)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
