from unittest.mock import patch

from django.test import TestCase

from services.matching import find_taxis, NO_ROUTES_MESSAGE
from services.tests.factories import (
	ARCADIA,
	CENTRAL,
	HATFIELD,
	make_driver,
	make_route,
	north_of,
)


class FindTaxisTests(TestCase):
	def test_no_routes(self):
		result = find_taxis(CENTRAL, HATFIELD)

		self.assertTrue(result.success)
		self.assertEqual(result.message, NO_ROUTES_MESSAGE)
		self.assertEqual(result.available_taxis, [])
		self.assertEqual(result.total_routes_checked, 0)

	def test_driver_on_passing_route(self):
		route = make_route()
		driver = make_driver('thabo', route=route, location=north_of(CENTRAL, 0.3), plate='GP 123-456')

		result = find_taxis(CENTRAL, HATFIELD)

		self.assertTrue(result.success)
		self.assertEqual(result.total_taxis_found, 1)
		self.assertEqual(result.valid_routes_found, 1)

		taxi = result.available_taxis[0]
		self.assertEqual(taxi.user_id, driver.id)
		self.assertEqual(taxi.vehicle_registration, 'GP 123-456')
		self.assertAlmostEqual(taxi.distance_to_origin, 0.3, places=2)
		self.assertEqual(taxi.route_info.route_id, 'PTA-001')
		self.assertEqual(taxi.route_info.closest_start_stop.order, 1)
		self.assertEqual(taxi.route_info.closest_end_stop.order, 3)
		self.assertEqual(taxi.route_info.calculated_fare, 20.0)

	def test_two_stop_route_scenario(self):
		route = make_route(stops=(CENTRAL, HATFIELD))
		make_driver('thabo', route=route, location=CENTRAL)
		origin = north_of(CENTRAL, 0.2)

		result = find_taxis(origin, HATFIELD, max_origin_distance=1.0, max_destination_distance=1.0)

		self.assertEqual(len(result.available_taxis), 1)
		route_info = result.available_taxis[0].route_info
		self.assertAlmostEqual(route_info.start_proximity, 0.2, places=2)
		self.assertEqual(route_info.end_proximity, 0.0)
		self.assertAlmostEqual(route_info.total_score, round(0.6 * 0.2 + 0.4 * 0.0, 2))

	def test_reverse_journey_finds_no_route(self):
		route = make_route()
		make_driver('thabo', route=route, location=HATFIELD)

		result = find_taxis(HATFIELD, CENTRAL)

		self.assertEqual(result.message, NO_ROUTES_MESSAGE)
		self.assertEqual(result.total_routes_checked, 1)
		self.assertEqual(result.valid_routes_found, 0)

	def test_driver_too_far_from_pickup(self):
		route = make_route()
		make_driver('thabo', route=route, location=north_of(CENTRAL, 3))

		result = find_taxis(CENTRAL, HATFIELD, max_taxi_distance=2.0)

		self.assertTrue(result.success)
		self.assertEqual(result.total_taxis_found, 0)
		self.assertEqual(result.matching_routes[0].available_drivers, 0)

	def test_driver_without_location_is_skipped(self):
		route = make_route()
		make_driver('thabo', route=route)

		result = find_taxis(CENTRAL, HATFIELD)

		self.assertEqual(result.total_taxis_found, 0)

	def test_inactive_route_is_ignored(self):
		route = make_route(is_active=False)
		make_driver('thabo', route=route, location=CENTRAL)

		result = find_taxis(CENTRAL, HATFIELD)

		self.assertEqual(result.message, NO_ROUTES_MESSAGE)

	def test_results_are_truncated_but_counted(self):
		route = make_route()
		for index in range(15):
			make_driver(f'driver{index}', route=route, location=north_of(CENTRAL, 0.05 * (index + 1)))

		result = find_taxis(CENTRAL, HATFIELD, max_results=5)

		self.assertEqual(len(result.available_taxis), 5)
		self.assertEqual(result.total_taxis_found, 15)
		distances = [taxi.distance_to_origin for taxi in result.available_taxis]
		self.assertEqual(distances, sorted(distances))

	def test_better_route_ranks_first(self):
		close_route = make_route('PTA-001')
		# Starts ~0.8 km away from the pickup
		loose_route = make_route('PTA-002', stops=(north_of(CENTRAL, 0.8), ARCADIA, HATFIELD))
		near_driver = make_driver('near', route=loose_route, location=CENTRAL)
		far_driver = make_driver('far', route=close_route, location=north_of(CENTRAL, 1.5))

		result = find_taxis(CENTRAL, HATFIELD)

		self.assertEqual(
			[taxi.user_id for taxi in result.available_taxis],
			[far_driver.id, near_driver.id],
		)
		self.assertEqual([route.route_id for route in result.matching_routes], ['PTA-001', 'PTA-002'])

	def test_enriched_stops_supersede_primary(self):
		# Primary stops alone sit ~2 km from the pickup
		route = make_route(
			stops=(north_of(CENTRAL, 2), HATFIELD),
			enriched=(north_of(CENTRAL, 2), CENTRAL, ARCADIA, HATFIELD),
		)
		make_driver('thabo', route=route, location=CENTRAL)

		result = find_taxis(CENTRAL, HATFIELD)

		self.assertEqual(result.total_taxis_found, 1)
		self.assertAlmostEqual(result.available_taxis[0].route_info.start_proximity, 0.0)

	@patch('services.matching.taxi_matcher._score_active_routes', side_effect=RuntimeError('database is locked'))
	def test_errors_become_failed_result(self, mock_score):
		result = find_taxis(CENTRAL, HATFIELD)

		self.assertFalse(result.success)
		self.assertEqual(result.message, 'Error finding available taxis: database is locked')
		self.assertEqual(result.available_taxis, [])
