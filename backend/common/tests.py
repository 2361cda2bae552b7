import math
from datetime import datetime, timezone as dt_timezone

from django.test import SimpleTestCase, override_settings

from common.utils import (
	calculate_fare,
	distance_km,
	eta_minutes,
	format_clock_time,
	format_distance,
	format_time,
)

CENTRAL = (-25.7461, 28.1881)
HATFIELD = (-25.7487, 28.2380)


class DistanceTests(SimpleTestCase):
	def test_identical_points_are_zero(self):
		self.assertEqual(distance_km(CENTRAL, CENTRAL), 0.0)

	def test_symmetric(self):
		self.assertAlmostEqual(distance_km(CENTRAL, HATFIELD), distance_km(HATFIELD, CENTRAL), places=9)

	def test_central_to_hatfield(self):
		# Roughly 5 km across Pretoria's inner east
		self.assertAlmostEqual(distance_km(CENTRAL, HATFIELD), 5.0, delta=0.1)

	def test_one_degree_of_latitude(self):
		self.assertAlmostEqual(distance_km((0.0, 0.0), (1.0, 0.0)), 111.195, places=2)

	def test_antipodal_points_do_not_fail(self):
		self.assertAlmostEqual(distance_km((0.0, 0.0), (0.0, 180.0)), math.pi * 6371.0, places=3)

	def test_triangle_inequality(self):
		arcadia = (-25.7449, 28.2100)
		self.assertLessEqual(
			distance_km(CENTRAL, HATFIELD),
			distance_km(CENTRAL, arcadia) + distance_km(arcadia, HATFIELD) + 1e-9,
		)


class EtaAndFormattingTests(SimpleTestCase):
	def test_eta_at_default_speed(self):
		self.assertEqual(eta_minutes(15), 30)

	def test_eta_zero_speed_is_infinite(self):
		self.assertEqual(eta_minutes(1, avg_speed_kmh=0), math.inf)

	def test_format_distance(self):
		self.assertEqual(format_distance(0.45), "450m")
		self.assertEqual(format_distance(2.34), "2.3km")

	def test_format_time(self):
		self.assertEqual(format_time(0.5), "less than a minute")
		self.assertEqual(format_time(1), "1 minute")
		self.assertEqual(format_time(7.4), "7 minutes")
		self.assertEqual(format_time(65), "1h 5m")

	@override_settings(USE_TZ=True, TIME_ZONE="Africa/Johannesburg")
	def test_format_clock_time_uses_local_time(self):
		now = datetime(2024, 5, 1, 8, 0, tzinfo=dt_timezone.utc)
		self.assertEqual(format_clock_time(12, now=now), "10:12")


class FareTests(SimpleTestCase):
	def test_flat_fare_up_to_ten_km(self):
		self.assertEqual(calculate_fare(0), 20.0)
		self.assertEqual(calculate_fare(10), 20.0)

	def test_each_started_block_adds_overage(self):
		# 2.5 for the first block, rounded up to a whole rand
		self.assertEqual(calculate_fare(12), 23.0)
		self.assertEqual(calculate_fare(20), 25.0)
		self.assertEqual(calculate_fare(21), 28.0)
