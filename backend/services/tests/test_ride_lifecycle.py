from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase

from drivers.models import DriverProfile
from notifications.models import Notification
from rides.models import Ride
from services.matching.results import MatchResult, SearchCriteria
from services.ride_management import (
	accept_ride,
	cancel_ride,
	create_ride_request,
	decline_ride,
	end_ride,
	start_ride,
	DriverNotAvailableError,
	RideNotAuthorizedError,
	RideNotFoundError,
	RideStateError,
)
from services.tests.factories import (
	CENTRAL,
	HATFIELD,
	make_driver,
	make_ride,
	make_route,
	make_user,
	north_of,
)


class LifecycleTestCase(TestCase):
	def setUp(self):
		self.passenger = make_user('lerato')
		self.driver = make_driver('thabo')
		self.other = make_user('sipho', role='driver')

	def ride(self, status=Ride.REQUESTED, driver='default', **extra):
		driver = self.driver if driver == 'default' else driver
		return make_ride(self.passenger, driver, status=status, **extra)


class AcceptDeclineTests(LifecycleTestCase):
	def test_unknown_ride(self):
		self.assertRaisesMessage(RideNotFoundError, 'Ride not found', accept_ride, 'ride_missing', self.driver.id)

	def test_accept(self):
		ride = self.ride()

		result = accept_ride(ride.ride_id, self.driver.id)

		ride.refresh_from_db()
		self.assertEqual(result.ride_id, ride.ride_id)
		self.assertEqual(ride.status, Ride.ACCEPTED)
		self.assertIsNotNone(ride.accepted_at)
		notification = Notification.objects.get(type='ride_accepted')
		self.assertEqual(notification.user_id, self.passenger.id)
		self.assertEqual(notification.message, 'Your ride has been accepted. Driver is on the way!')

	def test_unassigned_ride_goes_to_accepting_driver(self):
		ride = self.ride(driver=None)

		accept_ride(ride.ride_id, self.other.id)

		ride.refresh_from_db()
		self.assertEqual(ride.driver_id, self.other.id)

	def test_only_assigned_driver_can_accept(self):
		ride = self.ride()
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'Only the assigned driver can accept this ride',
			accept_ride, ride.ride_id, self.other.id,
		)

	def test_accept_twice(self):
		ride = self.ride()
		accept_ride(ride.ride_id, self.driver.id)
		self.assertRaisesMessage(
			RideStateError, 'Ride is not available for acceptance',
			accept_ride, ride.ride_id, self.driver.id,
		)

	def test_decline(self):
		ride = self.ride()

		decline_ride(ride.ride_id, self.driver.id)

		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.DECLINED)
		self.assertTrue(Notification.objects.filter(user=self.passenger, type='ride_declined').exists())

	def test_decline_guards(self):
		ride = self.ride()
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'Only the assigned driver can decline this ride',
			decline_ride, ride.ride_id, self.other.id,
		)
		for status in (Ride.IN_PROGRESS, Ride.COMPLETED):
			with self.subTest(status=status):
				stale = self.ride(status=status)
				self.assertRaisesMessage(
					RideStateError, 'Ride is not pending',
					decline_ride, stale.ride_id, self.driver.id,
				)

	def test_decline_accepted_ride(self):
		ride = self.ride(status=Ride.ACCEPTED)

		result = decline_ride(ride.ride_id, self.driver.id)

		ride.refresh_from_db()
		self.assertEqual(result.ride_id, ride.ride_id)
		self.assertEqual(ride.status, Ride.DECLINED)
		notification = Notification.objects.get(type='ride_declined')
		self.assertEqual(notification.user_id, self.passenger.id)

	def test_passenger_cannot_accept_unassigned_ride(self):
		ride = self.ride(driver=None)
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'Only the assigned driver can accept this ride',
			accept_ride, ride.ride_id, self.passenger.id,
		)
		ride.refresh_from_db()
		self.assertIsNone(ride.driver_id)
		self.assertEqual(ride.status, Ride.REQUESTED)

	@patch('services.ride_management.ride_lifecycle.send_ride_notification', side_effect=RuntimeError('push down'))
	def test_notification_failure_does_not_undo_transition(self, mock_send):
		ride = self.ride()

		result = accept_ride(ride.ride_id, self.driver.id)

		mock_send.assert_called_once()
		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.ACCEPTED)
		self.assertEqual(result.message, 'Ride accepted successfully')


class CancelTests(LifecycleTestCase):
	def test_passenger_cancel_notifies_driver(self):
		ride = self.ride(status=Ride.ACCEPTED)

		cancel_ride(ride.ride_id, self.passenger.id)

		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.CANCELLED)
		self.assertIsNotNone(ride.cancelled_at)
		notification = Notification.objects.get(type='ride_cancelled')
		self.assertEqual(notification.user_id, self.driver.id)
		self.assertEqual(notification.message, 'The ride has been cancelled by the passenger.')

	def test_driver_cancel_notifies_passenger(self):
		ride = self.ride()

		cancel_ride(ride.ride_id, self.driver.id)

		notification = Notification.objects.get(type='ride_cancelled')
		self.assertEqual(notification.user_id, self.passenger.id)
		self.assertEqual(notification.message, 'Your ride has been cancelled by the driver.')

	def test_stranger_cannot_cancel(self):
		ride = self.ride()
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'User is not authorized to cancel this ride',
			cancel_ride, ride.ride_id, self.other.id,
		)

	def test_terminal_ride_cannot_be_cancelled(self):
		for status in Ride.TERMINAL_STATUSES:
			with self.subTest(status=status):
				ride = self.ride(status=status)
				self.assertRaisesMessage(
					RideStateError, 'Ride can no longer be cancelled',
					cancel_ride, ride.ride_id, self.passenger.id,
				)


class StartEndTests(LifecycleTestCase):
	def test_start(self):
		ride = self.ride(status=Ride.ACCEPTED)

		start_ride(ride.ride_id, self.passenger.id)

		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.IN_PROGRESS)
		self.assertIsNotNone(ride.started_at)
		self.assertEqual(
			set(Notification.objects.filter(type='ride_started').values_list('user_id', flat=True)),
			{self.passenger.id, self.driver.id},
		)

	def test_start_guards(self):
		ride = self.ride(status=Ride.ACCEPTED)
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'Only the passenger can start the ride',
			start_ride, ride.ride_id, self.driver.id,
		)
		pending = self.ride()
		self.assertRaisesMessage(
			RideStateError, 'Ride is not ready to start',
			start_ride, pending.ride_id, self.passenger.id,
		)

	def test_end_uses_estimated_fare(self):
		ride = self.ride(status=Ride.IN_PROGRESS, estimated_fare=Decimal('22.50'))

		end_ride(ride.ride_id, self.passenger.id)

		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.COMPLETED)
		self.assertEqual(ride.final_fare, Decimal('22.50'))
		self.assertIsNotNone(ride.completed_at)
		driver_note = Notification.objects.get(type='ride_completed', user=self.driver)
		self.assertEqual(driver_note.message, 'Ride completed successfully. Fare: R22.50')
		self.assertEqual(DriverProfile.objects.get(user=self.driver).number_of_rides_completed, 1)

	def test_end_without_quote_charges_fare_rule(self):
		ride = self.ride(status=Ride.STARTED)

		end_ride(ride.ride_id, self.passenger.id)

		ride.refresh_from_db()
		self.assertEqual(ride.final_fare, Decimal('20.00'))

	def test_end_guards(self):
		ride = self.ride(status=Ride.IN_PROGRESS)
		self.assertRaisesMessage(
			RideNotAuthorizedError, 'Only the assigned passenger can end this ride',
			end_ride, ride.ride_id, self.driver.id,
		)
		pending = self.ride()
		self.assertRaisesMessage(
			RideStateError, 'Ride is not in progress or started',
			end_ride, pending.ride_id, self.passenger.id,
		)
		cancelled = self.ride(status=Ride.CANCELLED)
		self.assertRaisesMessage(
			RideStateError, 'Ride is not in progress or started',
			end_ride, cancelled.ride_id, self.passenger.id,
		)


class CreateRideRequestTests(LifecycleTestCase):
	def setUp(self):
		super().setUp()
		route = make_route()
		self.route_driver = make_driver('bongani', route=route, location=north_of(CENTRAL, 0.5))

	def test_creates_ride_with_quote(self):
		result = create_ride_request(self.passenger, self.route_driver.id, CENTRAL, HATFIELD, 'Church Square', 'Hatfield')

		self.assertFalse(result.is_duplicate)
		ride = result.ride
		self.assertEqual(ride.status, Ride.REQUESTED)
		self.assertEqual(ride.driver_id, self.route_driver.id)
		self.assertEqual(ride.estimated_fare, Decimal('20.00'))
		self.assertAlmostEqual(ride.estimated_distance, 5.01, places=1)
		notification = Notification.objects.get(type='ride_request')
		self.assertEqual(notification.user_id, self.route_driver.id)
		self.assertEqual(notification.message, 'New ride request from Church Square to Hatfield')

	def test_duplicate_request_returns_existing(self):
		first = create_ride_request(self.passenger, self.route_driver.id, CENTRAL, HATFIELD)
		second = create_ride_request(self.passenger, self.route_driver.id, CENTRAL, HATFIELD)

		self.assertTrue(second.is_duplicate)
		self.assertEqual(second.ride_id, first.ride_id)
		self.assertEqual(Ride.objects.count(), 1)

	def test_driver_not_serving_journey(self):
		self.assertRaisesMessage(
			DriverNotAvailableError, 'Driver is not available for this route or no matching route found',
			create_ride_request, self.passenger, self.driver.id, CENTRAL, HATFIELD,
		)
		self.assertEqual(Ride.objects.count(), 0)

	def test_wrong_direction(self):
		with self.assertRaises(DriverNotAvailableError):
			create_ride_request(self.passenger, self.route_driver.id, HATFIELD, CENTRAL)

	@patch('services.ride_management.ride_lifecycle.find_taxis')
	def test_search_failure_is_not_reported_as_unavailable_driver(self, mock_find):
		mock_find.return_value = MatchResult(
			success=False,
			search_criteria=SearchCriteria(CENTRAL, HATFIELD, 3.0, 3.0, 5.0, 50),
			message='Error finding available taxis: connection refused',
		)

		with self.assertRaises(RuntimeError) as ctx:
			create_ride_request(self.passenger, self.route_driver.id, CENTRAL, HATFIELD)

		self.assertNotIsInstance(ctx.exception, DriverNotAvailableError)
		self.assertIn('Failed to create ride request', str(ctx.exception))
		self.assertEqual(Ride.objects.count(), 0)
		self.assertFalse(Notification.objects.exists())
