"""Read-only product catalogue API."""

from __future__ import annotations

from rest_framework import permissions, viewsets  # type: ignore

from .models import Product
from .serializers import ProductSerializer


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """Public listing of rooms and their remaining stock."""

    queryset = Product.objects.select_related("seller").all()
    serializer_class = ProductSerializer
    permission_classes = [permissions.AllowAny]
