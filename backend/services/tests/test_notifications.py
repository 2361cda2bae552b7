from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

from django.test import TestCase, override_settings
from django.utils import timezone

from notifications.models import Notification
from realtime.notifications import push_to_user
from rides.models import Ride
from services.notifications import NotificationDebouncer, emit_notification, send_ride_notification
from services.tests.factories import make_ride, make_user


class DebouncerTests(TestCase):
	def setUp(self):
		self.passenger = make_user('lerato')
		self.t0 = timezone.now()

	def emit(self, now, notification_type='driver_arrived', ride_id='ride_1'):
		return emit_notification(
			self.passenger.id, notification_type, ride_id,
			'Driver Nearby', 'Your driver is close.', 'high',
			debouncer=NotificationDebouncer(120), now=now,
		)

	def test_second_alert_within_window_is_suppressed(self):
		self.assertIsNotNone(self.emit(self.t0))
		self.assertIsNone(self.emit(self.t0 + timedelta(seconds=60)))
		self.assertEqual(Notification.objects.count(), 1)

	def test_alert_after_window_is_sent_again(self):
		self.emit(self.t0)
		self.assertIsNotNone(self.emit(self.t0 + timedelta(seconds=121)))
		self.assertEqual(Notification.objects.count(), 2)

	def test_window_is_per_type_and_ride(self):
		self.emit(self.t0)
		self.assertIsNotNone(self.emit(self.t0, notification_type='driver_nearby'))
		self.assertIsNotNone(self.emit(self.t0, ride_id='ride_2'))

	@override_settings(NOTIFICATION_DEBOUNCE_SECONDS=30)
	def test_default_window_from_settings(self):
		self.assertEqual(NotificationDebouncer().window, timedelta(seconds=30))

	def test_stored_fields(self):
		notification = self.emit(self.t0)

		self.assertEqual(notification.ride_id, 'ride_1')
		self.assertEqual(notification.metadata['rideId'], 'ride_1')
		self.assertEqual(notification.priority, 'high')
		self.assertFalse(notification.is_read)


class PushTests(TestCase):
	def setUp(self):
		self.passenger = make_user('lerato')

	@patch('services.notifications.dispatch.push_to_user', return_value=True)
	def test_successful_push_is_recorded(self, mock_push):
		notification = self.emit()

		mock_push.assert_called_once()
		self.assertEqual(mock_push.call_args[0][0], self.passenger.id)
		notification.refresh_from_db()
		self.assertTrue(notification.is_push)

	@patch('services.notifications.dispatch.push_to_user', side_effect=ConnectionError('redis down'))
	def test_push_failure_keeps_notification(self, mock_push):
		notification = self.emit()

		notification.refresh_from_db()
		self.assertFalse(notification.is_push)

	def emit(self):
		return emit_notification(
			self.passenger.id, 'driver_arrived', 'ride_1',
			'Driver Arrived', 'Your driver has arrived.', 'urgent',
		)

	def test_push_to_user_sends_to_personal_group(self):
		layer = MagicMock()
		layer.group_send = AsyncMock()

		with patch('realtime.notifications.get_channel_layer', return_value=layer):
			self.assertTrue(push_to_user(7, {'type': 'driver_nearby'}))

		layer.group_send.assert_awaited_once_with(
			'user_7', {'type': 'notification_push', 'notification': {'type': 'driver_nearby'}}
		)

	def test_push_without_user_is_skipped(self):
		self.assertFalse(push_to_user(None, {}))


class RideNotificationTests(TestCase):
	def setUp(self):
		self.passenger = make_user('lerato')
		self.driver = make_user('thabo', role='driver')

	def test_driver_cancel_tells_passenger(self):
		ride = make_ride(self.passenger, self.driver, status=Ride.CANCELLED)

		sent = send_ride_notification(ride, 'ride_cancelled', actor_id=self.driver.id)

		self.assertEqual(len(sent), 1)
		self.assertEqual(sent[0].user_id, self.passenger.id)
		self.assertEqual(sent[0].message, 'Your ride has been cancelled by the driver.')

	def test_passenger_cancel_tells_driver(self):
		ride = make_ride(self.passenger, self.driver, status=Ride.CANCELLED)

		sent = send_ride_notification(ride, 'ride_cancelled', actor_id=self.passenger.id)

		self.assertEqual(sent[0].user_id, self.driver.id)
		self.assertEqual(sent[0].message, 'The ride has been cancelled by the passenger.')

	def test_completion_tells_driver_the_fare(self):
		ride = make_ride(self.passenger, self.driver, status=Ride.COMPLETED, final_fare='25.00')

		sent = send_ride_notification(ride, 'ride_completed')

		self.assertEqual({n.user_id for n in sent}, {self.passenger.id, self.driver.id})
		driver_note = next(n for n in sent if n.user_id == self.driver.id)
		self.assertEqual(driver_note.message, 'Ride completed successfully. Fare: R25.00')

	def test_ride_notifications_are_not_debounced(self):
		ride = make_ride(self.passenger, self.driver, status=Ride.ACCEPTED)

		send_ride_notification(ride, 'ride_accepted')
		send_ride_notification(ride, 'ride_accepted')

		self.assertEqual(Notification.objects.filter(type='ride_accepted').count(), 2)

	def test_unknown_event(self):
		ride = make_ride(self.passenger, self.driver)
		with self.assertRaises(ValueError):
			send_ride_notification(ride, 'ride_teleported')
