from django.urls import include, path
from rest_framework.routers import DefaultRouter

from messaging.api.views import MessageViewSet, ReportViewSet


app_name = "messaging"

router = DefaultRouter()
router.register(r"messages", MessageViewSet, basename="message")
router.register(r"reports", ReportViewSet, basename="report")

urlpatterns = [
    path("", include(router.urls)),
]
