import math
from types import SimpleNamespace

from django.test import SimpleTestCase

from services.matching.route_scorer import score_route, find_closest_stop

CENTRAL = (-25.7461, 28.1881)
ARCADIA = (-25.7449, 28.2100)
HATFIELD = (-25.7487, 28.2380)


def stops(*points):
	return [
		SimpleNamespace(latitude=lat, longitude=lon, order=order)
		for order, (lat, lon) in enumerate(points, start=1)
	]


class RouteScorerTests(SimpleTestCase):
	def setUp(self):
		self.route = stops(CENTRAL, ARCADIA, HATFIELD)

	def test_journey_along_route_is_directional(self):
		result = score_route(self.route, CENTRAL, HATFIELD)

		self.assertTrue(result.is_directional)
		self.assertEqual(result.origin_stop.order, 1)
		self.assertEqual(result.destination_stop.order, 3)
		self.assertAlmostEqual(result.score, 0.0, places=6)
		self.assertTrue(result.passes(1.0, 1.0))

	def test_reverse_journey_is_rejected(self):
		result = score_route(self.route, HATFIELD, CENTRAL)

		self.assertFalse(result.is_directional)
		self.assertFalse(result.passes(1.0, 1.0))

	def test_same_closest_stop_is_not_directional(self):
		nearby = (CENTRAL[0] + 0.001, CENTRAL[1])
		result = score_route(self.route, CENTRAL, nearby)

		self.assertIs(result.origin_stop, result.destination_stop)
		self.assertFalse(result.is_directional)

	def test_weighted_score(self):
		origin = (CENTRAL[0] + 0.005, CENTRAL[1])
		destination = (HATFIELD[0] - 0.002, HATFIELD[1])
		result = score_route(self.route, origin, destination)

		expected = 0.6 * result.origin_proximity + 0.4 * result.destination_proximity
		self.assertAlmostEqual(result.score, expected, places=9)

	def test_far_origin_fails_limit(self):
		origin = (CENTRAL[0] + 0.05, CENTRAL[1])  # ~5.5 km north
		result = score_route(self.route, origin, HATFIELD)

		self.assertTrue(result.is_directional)
		self.assertFalse(result.passes(1.0, 1.0))
		self.assertTrue(result.passes(6.0, 1.0))

	def test_route_without_stops_never_passes(self):
		result = score_route([], CENTRAL, HATFIELD)

		self.assertEqual(result.score, math.inf)
		self.assertIsNone(result.origin_stop)
		self.assertFalse(result.passes(1000.0, 1000.0))

	def test_find_closest_stop(self):
		stop, distance = find_closest_stop(self.route, (ARCADIA[0], ARCADIA[1] + 0.001))

		self.assertEqual(stop.order, 2)
		self.assertLess(distance, 0.2)
