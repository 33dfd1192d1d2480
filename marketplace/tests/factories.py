from decimal import Decimal

import factory
from faker import Faker

from authentication.tests.factories import AdminFactory, UserFactory
from marketplace.models import Category, Order, Product, ProductImage, ProductLike, Review, TradeOffer


fake = Faker()

__all__ = [
    "AdminFactory",
    "CategoryFactory",
    "OrderFactory",
    "ProductFactory",
    "ProductImageFactory",
    "ProductLikeFactory",
    "ReviewFactory",
    "TradeOnlyProductFactory",
    "TradeOfferFactory",
    "UserFactory",
]


class CategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker("sentence", nb_words=8)


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("paragraph", nb_sentences=3)
    seller = factory.SubFactory(UserFactory)
    category = factory.SubFactory(CategoryFactory)
    price = Decimal("25.00")
    stock = 5
    condition = "good"
    brand_type = factory.LazyFunction(lambda: fake.company()[:100])
    trade_only = False
    is_available = True


class TradeOnlyProductFactory(ProductFactory):
    price = None
    trade_only = True


class ProductImageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductImage

    product = factory.SubFactory(ProductFactory)
    image_url = factory.Sequence(lambda n: f"https://img.campus.test/{n}.jpg")
    is_primary = False
    order = factory.Sequence(lambda n: n)


class ProductLikeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductLike

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory(UserFactory)


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    buyer = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    seller = factory.SelfAttribute("product.seller")
    quantity = 1
    total_amount = factory.LazyAttribute(lambda o: (o.product.price or Decimal("0.00")) * o.quantity)
    status = Order.PENDING
    payment_method = "cash"
    pickup_location = "Library entrance"


class TradeOfferFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = TradeOffer

    product = factory.SubFactory(ProductFactory)
    offerer = factory.SubFactory(UserFactory)
    item_name = factory.Sequence(lambda n: f"Offered item {n}")
    item_estimated_value = Decimal("20.00")
    offered_price = Decimal("20.00")
    trade_description = factory.Faker("sentence", nb_words=6)
    status = TradeOffer.PENDING


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    reviewer = factory.SubFactory(UserFactory)
    seller = factory.SubFactory(UserFactory)
    rating = 5
    comment = factory.Faker("sentence", nb_words=10)
