from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed")
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, float("inf")],
)
order_status_transitions_total = Counter(
    "marketplace_order_status_transitions_total", "Order status changes", ["from_status", "to_status"]
)

# Trade Offer Metrics
trade_offers_created_total = Counter("marketplace_trade_offers_created_total", "Trade offers submitted")
trade_offer_transitions_total = Counter(
    "marketplace_trade_offer_transitions_total", "Trade offer status changes", ["to_status"]
)

# Catalog Metrics
product_likes_total = Counter("marketplace_product_likes_total", "Product like toggles", ["action"])
