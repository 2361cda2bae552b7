from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from notifications.models import Notification
from services.tests.factories import (
	CENTRAL,
	HATFIELD,
	make_driver,
	make_ride,
	make_route,
	make_user,
	north_of,
	set_location,
)
from .models import Ride
from .tasks import proximity_sweep_task
from .views import (
	find_available_taxis,
	proximity_tick,
	request_ride,
	ride_action,
	ride_detail,
	ride_proximity,
)


class RideViewTestCase(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.passenger = make_user('lerato')
		route = make_route()
		self.driver = make_driver('thabo', route=route, location=north_of(CENTRAL, 0.5), plate='GP 123-456')
		self.stranger = make_user('sipho')

	def post(self, view, user, data=None, **kwargs):
		request = self.factory.post('/', data or {}, format='json')
		force_authenticate(request, user=user)
		return view(request, **kwargs)

	def get(self, view, user, params=None, **kwargs):
		request = self.factory.get('/', params or {})
		force_authenticate(request, user=user)
		return view(request, **kwargs)


class FindTaxisViewTests(RideViewTestCase):
	def journey(self, **extra):
		return {
			'start_latitude': CENTRAL[0],
			'start_longitude': CENTRAL[1],
			'end_latitude': HATFIELD[0],
			'end_longitude': HATFIELD[1],
			**extra,
		}

	def test_search(self):
		response = self.get(find_available_taxis, self.passenger, self.journey())

		self.assertEqual(response.status_code, 200)
		self.assertTrue(response.data['success'])
		self.assertEqual(response.data['total_taxis_found'], 1)
		taxi = response.data['available_taxis'][0]
		self.assertEqual(taxi['user_id'], self.driver.id)
		self.assertEqual(taxi['route_info']['route_id'], 'PTA-001')
		self.assertEqual(response.data['search_criteria']['max_results'], 10)

	def test_missing_coordinates(self):
		response = self.get(find_available_taxis, self.passenger, {'start_latitude': CENTRAL[0]})

		self.assertEqual(response.status_code, 400)

	def test_requires_authentication(self):
		request = self.factory.get('/', self.journey())
		response = find_available_taxis(request)

		self.assertEqual(response.status_code, 401)


class RequestRideViewTests(RideViewTestCase):
	def payload(self, driver_id):
		return {
			'driver_id': driver_id,
			'start_latitude': CENTRAL[0],
			'start_longitude': CENTRAL[1],
			'end_latitude': HATFIELD[0],
			'end_longitude': HATFIELD[1],
			'start_address': 'Church Square',
			'end_address': 'Hatfield',
		}

	def test_request_and_duplicate(self):
		response = self.post(request_ride, self.passenger, self.payload(self.driver.id))

		self.assertEqual(response.status_code, 201)
		self.assertFalse(response.data['is_duplicate'])
		self.assertEqual(response.data['ride']['status'], 'requested')

		again = self.post(request_ride, self.passenger, self.payload(self.driver.id))

		self.assertEqual(again.status_code, 200)
		self.assertTrue(again.data['is_duplicate'])
		self.assertEqual(again.data['ride']['ride_id'], response.data['ride']['ride_id'])

	def test_unavailable_driver(self):
		response = self.post(request_ride, self.passenger, self.payload(self.stranger.id))

		self.assertEqual(response.status_code, 400)
		self.assertEqual(response.data['error'], 'Driver is not available for this route or no matching route found')

	def test_cannot_request_self(self):
		response = self.post(request_ride, self.driver, self.payload(self.driver.id))

		self.assertEqual(response.status_code, 400)


class RideActionViewTests(RideViewTestCase):
	def test_accept(self):
		ride = make_ride(self.passenger, self.driver)

		response = self.post(ride_action, self.driver, ride_id=ride.ride_id, action='accept')

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['ride']['status'], 'accepted')

	def test_error_codes(self):
		ride = make_ride(self.passenger, self.driver)

		missing = self.post(ride_action, self.driver, ride_id='ride_missing', action='accept')
		forbidden = self.post(ride_action, self.stranger, ride_id=ride.ride_id, action='accept')
		bad_state = self.post(ride_action, self.passenger, ride_id=ride.ride_id, action='start')
		unknown = self.post(ride_action, self.driver, ride_id=ride.ride_id, action='teleport')

		self.assertEqual(missing.status_code, 404)
		self.assertEqual(missing.data, {'error': 'Ride not found'})
		self.assertEqual(forbidden.status_code, 403)
		self.assertEqual(forbidden.data, {'error': 'Only the assigned driver can accept this ride'})
		self.assertEqual(bad_state.status_code, 400)
		self.assertEqual(bad_state.data, {'error': 'Ride is not ready to start'})
		self.assertEqual(unknown.status_code, 404)

	def test_full_ride(self):
		ride = make_ride(self.passenger, self.driver)

		for user, action in [(self.driver, 'accept'), (self.passenger, 'start'), (self.passenger, 'end')]:
			response = self.post(ride_action, user, ride_id=ride.ride_id, action=action)
			self.assertEqual(response.status_code, 200, action)

		ride.refresh_from_db()
		self.assertEqual(ride.status, Ride.COMPLETED)
		self.assertIsNotNone(ride.final_fare)

	def test_detail_only_for_participants(self):
		ride = make_ride(self.passenger, self.driver)

		ok = self.get(ride_detail, self.passenger, ride_id=ride.ride_id)
		hidden = self.get(ride_detail, self.stranger, ride_id=ride.ride_id)

		self.assertEqual(ok.status_code, 200)
		self.assertEqual(ok.data['driver_profile']['license_plate'], 'GP 123-456')
		self.assertEqual(hidden.status_code, 404)


class ProximityViewTests(RideViewTestCase):
	def setUp(self):
		super().setUp()
		set_location(self.passenger, CENTRAL)
		self.ride = make_ride(self.passenger, self.driver, status=Ride.ACCEPTED)

	def test_tick(self):
		response = self.post(proximity_tick, self.passenger)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['rides_checked'], 1)
		self.assertEqual(response.data['notifications_sent'], 1)

	def test_single_ride(self):
		response = self.post(ride_proximity, self.passenger, ride_id=self.ride.ride_id)

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['band'], 'near')
		self.assertEqual(response.data['notifications_sent'], ['driver_nearby'])

	def test_single_ride_not_monitored(self):
		pending = make_ride(self.passenger, self.driver)

		response = self.post(ride_proximity, self.passenger, ride_id=pending.ride_id)

		self.assertEqual(response.status_code, 400)

	def test_celery_task(self):
		result = proximity_sweep_task()

		self.assertEqual(result['rides_checked'], 1)
		self.assertTrue(Notification.objects.filter(type='driver_nearby').exists())

	@patch('services.proximity.sweep.ProximitySweep.run_once', side_effect=RuntimeError('db down'))
	def test_celery_task_failure_is_logged(self, mock_run):
		self.assertIsNone(proximity_sweep_task())

	def test_management_command(self):
		out = StringIO()
		call_command('run_proximity_sweep', stdout=out)

		self.assertIn('Checked 1 ride(s); sent 1 notification(s)', out.getvalue())
