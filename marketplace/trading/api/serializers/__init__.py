from .trade_offer_serializers import TradeOfferCreateSerializer, TradeOfferSerializer, TradeOfferStatusSerializer


__all__ = ["TradeOfferSerializer", "TradeOfferCreateSerializer", "TradeOfferStatusSerializer"]
