import factory

from authentication.tests.factories import UserFactory
from messaging.domain.models import ConversationReport, Message


class MessageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Message

    sender = factory.SubFactory(UserFactory)
    receiver = factory.SubFactory(UserFactory)
    product = None
    content = factory.Sequence(lambda n: f"Is this still available? ({n})")


class ConversationReportFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ConversationReport

    reporter = factory.SubFactory(UserFactory)
    reported_user = factory.SubFactory(UserFactory)
    reason = "Spam"
