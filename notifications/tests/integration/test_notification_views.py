from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.tests.factories import UserFactory
from notifications.domain.models import Notification
from notifications.tests.factories import NotificationFactory


class NotificationViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.other = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_list_own_notifications_newest_first(self):
        older = NotificationFactory(recipient=self.user)
        newer = NotificationFactory(recipient=self.user, type=Notification.REVIEW)
        NotificationFactory(recipient=self.other)

        response = self.client.get(reverse("notifications:notification-for-profile", args=[self.user.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([n["id"] for n in response.data], [newer.id, older.id])
        self.assertEqual(response.data[0]["recipient"], str(self.user.id))

    def test_filter_by_type(self):
        NotificationFactory(recipient=self.user)
        review = NotificationFactory(recipient=self.user, type=Notification.REVIEW)

        response = self.client.get(
            reverse("notifications:notification-for-profile", args=[self.user.id]), {"type": "REVIEW"}
        )

        self.assertEqual([n["id"] for n in response.data], [review.id])

    def test_other_profile_forbidden(self):
        response = self.client.get(reverse("notifications:notification-for-profile", args=[self.other.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "You can only access your own notifications")

    def test_unread_list_and_count(self):
        unread = NotificationFactory(recipient=self.user)
        NotificationFactory(recipient=self.user, is_read=True)

        listing = self.client.get(reverse("notifications:notification-unread", args=[self.user.id]))
        count = self.client.get(reverse("notifications:notification-unread-count", args=[self.user.id]))

        self.assertEqual([n["id"] for n in listing.data], [unread.id])
        self.assertEqual(count.data, {"unread_count": 1})

    def test_mark_one_read(self):
        notification = NotificationFactory(recipient=self.user)

        response = self.client.patch(reverse("notifications:notification-read", args=[notification.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_read"])

    def test_mark_someone_elses_notification(self):
        notification = NotificationFactory(recipient=self.other)

        response = self.client.patch(reverse("notifications:notification-read", args=[notification.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_mark_missing_notification(self):
        response = self.client.patch(reverse("notifications:notification-read", args=[987654]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_read_all(self):
        NotificationFactory.create_batch(3, recipient=self.user)

        response = self.client.patch(reverse("notifications:notification-read-all", args=[self.user.id]))

        self.assertEqual(response.data, {"updated": 3})
        self.assertFalse(Notification.objects.filter(recipient=self.user, is_read=False).exists())

    def test_delete_one(self):
        notification = NotificationFactory(recipient=self.user)

        response = self.client.delete(reverse("notifications:notification-detail", args=[notification.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notification.objects.filter(id=notification.id).exists())

    def test_delete_all(self):
        NotificationFactory.create_batch(2, recipient=self.user)
        NotificationFactory(recipient=self.other)

        response = self.client.delete(reverse("notifications:notification-for-profile", args=[self.user.id]))

        self.assertEqual(response.data, {"deleted": 2})
        self.assertEqual(Notification.objects.count(), 1)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(reverse("notifications:notification-for-profile", args=[self.user.id]))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
