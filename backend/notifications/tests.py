from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from services.tests.factories import make_user
from .models import Notification
from .views import list_notifications, mark_all_read, mark_notification_read


class NotificationInboxTests(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.user = make_user('lerato')
		self.other = make_user('sipho')
		self.first = self.notify(self.user, 'ride_accepted')
		self.second = self.notify(self.user, 'driver_nearby')
		self.notify(self.other, 'ride_accepted')

	def notify(self, user, notification_type):
		return Notification.objects.create(
			user=user, type=notification_type, title='Title', message='Message', ride_id='ride_1',
		)

	def call(self, view, method='get', params=None, **kwargs):
		request = getattr(self.factory, method)('/', params or {})
		force_authenticate(request, user=self.user)
		return view(request, **kwargs)

	def test_list_only_own(self):
		response = self.call(list_notifications)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['unread_count'], 2)
		self.assertEqual(
			{n['notification_id'] for n in response.data['notifications']},
			{self.first.notification_id, self.second.notification_id},
		)

	def test_mark_read(self):
		response = self.call(mark_notification_read, 'post', notification_id=self.first.notification_id)

		self.assertEqual(response.status_code, 200)
		self.first.refresh_from_db()
		self.assertTrue(self.first.is_read)
		self.assertIsNotNone(self.first.read_at)

		unread = self.call(list_notifications, params={'unread': 'true'})
		self.assertEqual(len(unread.data['notifications']), 1)

	def test_cannot_mark_someone_elses(self):
		theirs = Notification.objects.get(user=self.other)

		response = self.call(mark_notification_read, 'post', notification_id=theirs.notification_id)

		self.assertEqual(response.status_code, 404)

	def test_mark_all_read(self):
		response = self.call(mark_all_read, 'post')

		self.assertEqual(response.data['marked_read'], 2)
		self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())
		self.assertTrue(Notification.objects.filter(user=self.other, is_read=False).exists())
