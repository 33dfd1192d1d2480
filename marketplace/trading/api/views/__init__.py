from .trade_offer_views import TradeOfferViewSet


__all__ = ["TradeOfferViewSet"]
