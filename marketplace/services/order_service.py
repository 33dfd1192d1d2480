"""
OrderService - order placement and the pickup lifecycle.

State Machine (``Order.TRANSITIONS``):
pending → confirmed → ready_for_pickup → completed
any non-terminal status → cancelled (restores stock)

The seller drives every transition; the buyer may only cancel a pending order.
"""

from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import Q

from marketplace.infra.observability.metrics import order_status_transitions_total, order_value, orders_placed_total
from marketplace.models import Order, Product

from .base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class OrderService(BaseService):
    """
    Service for managing order lifecycle.

    Dependencies:
    - NotificationService: tells the counterpart about each step (failures are logged only)
    """

    def __init__(self, notifications=None):
        super().__init__()
        self.notifications = notifications

    def _base_queryset(self):
        return Order.objects.select_related(
            "buyer", "seller", "product", "review"
        ).prefetch_related("product__images")

    @BaseService.log_performance
    def list_orders(self, user, status: Optional[str] = None) -> ServiceResult:
        queryset = self._base_queryset().filter(Q(buyer=user) | Q(seller=user))
        if status:
            queryset = queryset.filter(status=status)
        return service_ok(queryset.order_by("-created_at", "-id"))

    @BaseService.log_performance
    def get_order(self, order_id, user) -> ServiceResult[Order]:
        try:
            order = self._base_queryset().get(id=order_id)
        except (Order.DoesNotExist, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

        if not order.is_party(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this order")
        return service_ok(order)

    @BaseService.log_performance
    def list_buyer_orders(self, user, buyer_id) -> ServiceResult:
        if str(user.id) != str(buyer_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only view your own purchases")
        return service_ok(self._base_queryset().filter(buyer=user).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_seller_orders(self, user, seller_id) -> ServiceResult:
        if str(user.id) != str(seller_id):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only view your own sales")
        return service_ok(self._base_queryset().filter(seller=user).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def list_product_orders(self, user, product_id) -> ServiceResult:
        product = None
        if str(product_id).isdigit():
            product = Product.objects.filter(id=product_id).only("id", "seller_id").first()
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} not found")
        if product.seller_id != user.id:
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only the seller can view orders for this product")
        return service_ok(self._base_queryset().filter(product=product).order_by("-created_at", "-id"))

    @BaseService.log_performance
    def create_order(self, buyer, data: Dict[str, Any]) -> ServiceResult[Order]:
        """
        Place an order for one product.

        Workflow:
        1. Lock the product row and validate buyer, availability and stock
        2. Price the order (``price × quantity``) and decrement stock
        3. Notify the seller after the transaction commits

        Args:
            buyer: The authenticated user
            data: ``product`` (id), ``quantity`` and the optional
                  ``payment_method``, ``pickup_location``, ``delivery_notes``
        """
        quantity = data.get("quantity") or 1

        with transaction.atomic():
            try:
                product = Product.objects.select_for_update().select_related("seller").get(id=data["product"])
            except (Product.DoesNotExist, ValueError):
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {data['product']} not found")

            if product.seller_id == buyer.id:
                return service_err(ErrorCodes.VALIDATION_ERROR, "You cannot buy your own product")
            if not product.is_available:
                return service_err(ErrorCodes.PRODUCT_UNAVAILABLE, "This product is no longer available")
            if product.trade_only or product.price is None:
                return service_err(ErrorCodes.VALIDATION_ERROR, "This product is available for trade only")
            if product.stock < quantity:
                self.logger.warning(
                    f"Insufficient stock for {product.id}: available={product.stock}, requested={quantity}"
                )
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock available")

            order = Order.objects.create(
                buyer=buyer,
                seller=product.seller,
                product=product,
                quantity=quantity,
                total_amount=product.price * quantity,
                payment_method=data.get("payment_method", ""),
                pickup_location=data.get("pickup_location", ""),
                delivery_notes=data.get("delivery_notes", ""),
            )

            product.stock -= quantity
            product.save(update_fields=["stock", "updated_at"])

        orders_placed_total.inc()
        order_value.observe(float(order.total_amount))
        self.logger.info(f"Created order {order.id}: buyer={buyer.id} product={product.id} total={order.total_amount}")

        self._notify("notify_order_placed", order)
        return service_ok(order)

    @BaseService.log_performance
    def update_status(self, order_id, user, new_status: str, reason: Optional[str] = None) -> ServiceResult[Order]:
        """
        Move an order along the transition table.

        Returns ``invalid_transition`` for moves the table does not allow from
        the current status (same-status requests included) and
        ``permission_denied`` when the caller's role may not make an allowed move.
        """
        new_status = (new_status or "").strip().lower()

        with transaction.atomic():
            try:
                order = Order.objects.select_for_update().select_related("product").get(id=order_id)
            except (Order.DoesNotExist, ValueError):
                return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

            if not order.is_party(user):
                return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this order")

            if not order.can_transition(new_status):
                return service_err(
                    ErrorCodes.INVALID_TRANSITION,
                    f"Cannot change order status from '{order.status}' to '{new_status}'",
                )

            if not order.can_actor_transition(user, new_status):
                return service_err(
                    ErrorCodes.PERMISSION_DENIED,
                    f"You cannot change this order from '{order.status}' to '{new_status}'",
                )

            previous_status = order.status
            order.status = new_status
            update_fields = ["status", "updated_at"]

            if new_status == Order.CANCELLED:
                order.cancellation_reason = reason or ""
                update_fields.append("cancellation_reason")
                product = Product.objects.select_for_update().get(id=order.product_id)
                product.stock += order.quantity
                product.save(update_fields=["stock", "updated_at"])
                self.logger.info(f"Restored {order.quantity} stock to product {product.id}")

            order.save(update_fields=update_fields)

        order_status_transitions_total.labels(from_status=previous_status, to_status=new_status).inc()
        self.logger.info(f"Order {order.id}: {previous_status} -> {new_status} by {user.id}")

        order = self._base_queryset().get(id=order.id)
        if new_status == Order.CONFIRMED:
            self._notify("notify_order_confirmed", order)
        elif new_status == Order.READY_FOR_PICKUP:
            self._notify("notify_order_ready", order)
        elif new_status == Order.COMPLETED:
            self._notify("notify_order_completed", order)
        elif new_status == Order.CANCELLED:
            self._notify("notify_order_cancelled", order, reason)

        return service_ok(order)

    @BaseService.log_performance
    @transaction.atomic
    def delete_order(self, order_id, user) -> ServiceResult[bool]:
        try:
            order = Order.objects.select_for_update().get(id=order_id)
        except (Order.DoesNotExist, ValueError):
            return service_err(ErrorCodes.ORDER_NOT_FOUND, f"Order {order_id} not found")

        if not order.is_party(user):
            return service_err(ErrorCodes.PERMISSION_DENIED, "You are not a party to this order")
        if not order.is_terminal:
            return service_err(ErrorCodes.INVALID_STATE, "Only completed or cancelled orders can be deleted")

        order.delete()
        self.logger.info(f"Deleted order {order_id} by {user.id}")
        return service_ok(True)

    def _notify(self, method: str, *args):
        if self.notifications is None:
            return
        try:
            getattr(self.notifications, method)(*args)
        except Exception as e:
            self.logger.error(f"Failed to send {method} for order {args[0].id}: {e}", exc_info=True)
