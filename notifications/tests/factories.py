import factory

from authentication.tests.factories import UserFactory
from notifications.domain.models import Notification


class NotificationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Notification

    recipient = factory.SubFactory(UserFactory)
    type = Notification.ORDER_PLACED
    title = "New Order Received!"
    message = factory.Sequence(lambda n: f"Someone placed order #{n}")
    related_type = "ORDER"
