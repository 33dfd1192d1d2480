from django.urls import include, path
from rest_framework.routers import DefaultRouter

from marketplace.catalog.api.views import CategoryViewSet, ProductViewSet
from marketplace.ordering.api.views import OrderViewSet
from marketplace.reviews.api.views import ReviewViewSet
from marketplace.trading.api.views import TradeOfferViewSet


# Create the main router
router = DefaultRouter()
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"products", ProductViewSet, basename="product")
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"tradeoffers", TradeOfferViewSet, basename="tradeoffer")
router.register(r"reviews", ReviewViewSet, basename="review")

app_name = "marketplace"

urlpatterns = [
    path("", include(router.urls)),
]
