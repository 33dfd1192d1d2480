from .order_serializers import (
    OrderActionSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)


__all__ = ["OrderActionSerializer", "OrderCreateSerializer", "OrderSerializer", "OrderStatusUpdateSerializer"]
