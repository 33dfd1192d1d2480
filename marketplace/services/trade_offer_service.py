"""
TradeOfferService - barter proposals on listed products.

State Machine (``TradeOffer.TRANSITIONS``):
PENDING → ACCEPTED | REJECTED   (product seller)
PENDING → WITHDRAWN             (offerer)
Every other status is final. Accepting does not reserve the product.
"""

from decimal import Decimal
from typing import Any, Dict

from django.db import transaction
from django.db.models import Q

from marketplace.infra.observability.metrics import trade_offer_transitions_total, trade_offers_created_total
from marketplace.models import Product, TradeOffer

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


OFFER_FIELDS = (
    "trade_description",
    "item_name",
    "item_estimated_value",
    "item_condition",
    "item_image_url",
    "cash_component",
)


class TradeOfferService(BaseService):
    def __init__(self, notifications=None):
        super().__init__()
        self.notifications = notifications

    def _base_queryset(self):
        return TradeOffer.objects.select_related("product", "product__seller", "offerer").prefetch_related(
            "product__images"
        )

    @BaseService.log_performance
    def list_offers(self, user) -> ServiceResult:
        queryset = self._base_queryset().filter(Q(offerer=user) | Q(product__seller=user))
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    def get_offer(self, offer_id, user) -> ServiceResult[TradeOffer]:
        try:
            offer = self._base_queryset().get(id=offer_id)
        except (TradeOffer.DoesNotExist, ValueError):
            return service_err(ErrorCodes.TRADE_OFFER_NOT_FOUND, f"Trade offer {offer_id} not found")

        if not offer.is_party(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this trade offer")
        return service_ok(offer)

    @BaseService.log_performance
    def list_received(self, user, seller_id) -> ServiceResult:
        if str(user.id) != str(seller_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only view offers on your own products")
        return service_ok(self._base_queryset().filter(product__seller=user).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_made(self, user, offerer_id) -> ServiceResult:
        if str(user.id) != str(offerer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only view your own offers")
        return service_ok(self._base_queryset().filter(offerer=user).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_for_product(self, user, product_id) -> ServiceResult:
        """Offers on a product; the seller sees all of them, anyone else only their own."""
        product = None
        if str(product_id).isdigit():
            product = Product.objects.filter(id=product_id).only("id", "seller_id").first()
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")

        queryset = self._base_queryset().filter(product=product)
        if product.seller_id != user.id:
            queryset = queryset.filter(offerer=user)
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    def create_offer(self, offerer, data: Dict[str, Any]) -> ServiceResult[TradeOffer]:
        """
        Submit a PENDING offer on ``data["product"]``.

        ``offered_price`` defaults to the estimated value of the offered item, else 0.
        """
        try:
            product = Product.objects.select_related("seller").get(id=data["product"])
        except (Product.DoesNotExist, ValueError):
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {data['product']} not found")

        if product.seller_id == offerer.id:
            return service_err(ErrorCodes.VALIDATION_ERROR, "You cannot make a trade offer on your own product")
        if not product.is_available:
            return service_err(ErrorCodes.PRODUCT_UNAVAILABLE, "This product is no longer available")

        fields = {field: data[field] for field in OFFER_FIELDS if data.get(field) is not None}
        offered_price = data.get("offered_price")
        if offered_price is None:
            offered_price = data.get("item_estimated_value") or Decimal("0.00")

        offer = TradeOffer.objects.create(
            product=product,
            offerer=offerer,
            offered_price=offered_price,
            status=TradeOffer.PENDING,
            **fields,
        )

        trade_offers_created_total.inc()
        self.logger.info(f"Trade offer {offer.id} created on product {product.id} by {offerer.id}")

        self._notify("notify_trade_offer_received", offer)
        return service_ok(offer)

    @BaseService.log_performance
    def update_status(self, offer_id, user, new_status: str) -> ServiceResult[TradeOffer]:
        new_status = TradeOffer.normalize_status(new_status)

        with transaction.atomic():
            try:
                offer = TradeOffer.objects.select_for_update().select_related("product").get(id=offer_id)
            except (TradeOffer.DoesNotExist, ValueError):
                return service_err(ErrorCodes.TRADE_OFFER_NOT_FOUND, f"Trade offer {offer_id} not found")

            if not offer.is_party(user):
                return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this trade offer")

            if not offer.can_transition(new_status):
                return service_err(
                    ErrorCodes.INVALID_TRANSITION,
                    f"Cannot change trade offer status from '{offer.status}' to '{new_status}'",
                )

            if not offer.can_actor_transition(user, new_status):
                return service_err(
                    ErrorCodes.PERMISSION_DENIED,
                    f"Only the {offer.TRANSITIONS[offer.status][new_status]} can set this offer to {new_status}",
                )

            offer.status = new_status
            offer.save(update_fields=["status", "updated_at"])

        trade_offer_transitions_total.labels(to_status=new_status).inc()
        self.logger.info(f"Trade offer {offer.id} -> {new_status} by {user.id}")

        offer = self._base_queryset().get(id=offer.id)
        self._notify("notify_trade_offer_status", offer)
        return service_ok(offer)

    @BaseService.log_performance
    @transaction.atomic
    def delete_offer(self, offer_id, user) -> ServiceResult[bool]:
        try:
            offer = TradeOffer.objects.select_for_update().select_related("product").get(id=offer_id)
        except (TradeOffer.DoesNotExist, ValueError):
            return service_err(ErrorCodes.TRADE_OFFER_NOT_FOUND, f"Trade offer {offer_id} not found")

        if not offer.is_party(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this trade offer")
        if not offer.is_final:
            return service_err(ErrorCodes.INVALID_STATE, "Pending offers must be accepted, rejected or withdrawn first")

        offer.delete()
        self.logger.info(f"Deleted trade offer {offer_id} by {user.id}")
        return service_ok(True)

    def _notify(self, method: str, offer: TradeOffer):
        if self.notifications is None:
            return
        try:
            getattr(self.notifications, method)(offer)
        except Exception as e:
            self.logger.error(f"Failed to send {method} for trade offer {offer.id}: {e}", exc_info=True)
