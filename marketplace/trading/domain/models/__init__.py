from .trade_offer import TradeOffer


__all__ = ["TradeOffer"]
