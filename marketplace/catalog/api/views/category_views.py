from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets

from marketplace.catalog.api.serializers import CategorySerializer
from marketplace.models import Category
from marketplace.permissions import IsAdminOrReadOnly


@extend_schema_view(
    list=extend_schema(summary="List all categories", tags=["Marketplace - Categories"]),
    retrieve=extend_schema(summary="Get category details", tags=["Marketplace - Categories"]),
    create=extend_schema(summary="Create a category (admin only)", tags=["Marketplace - Categories"]),
    update=extend_schema(summary="Update a category (admin only)", tags=["Marketplace - Categories"]),
    partial_update=extend_schema(summary="Partially update a category (admin only)", tags=["Marketplace - Categories"]),
    destroy=extend_schema(summary="Delete a category (admin only)", tags=["Marketplace - Categories"]),
)
class CategoryViewSet(viewsets.ModelViewSet):
    """
    Product categories. Anyone may read, admins write.
    """

    queryset = Category.objects.order_by("name")
    serializer_class = CategorySerializer
    permission_classes = [IsAdminOrReadOnly]
