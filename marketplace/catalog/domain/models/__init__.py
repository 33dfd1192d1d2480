from .catalog import Product, ProductImage
from .category import Category
from .interaction import ProductLike


__all__ = [
    "Product",
    "ProductImage",
    "Category",
    "ProductLike",
]
