from django.db import IntegrityError
from django.test import TestCase

from services.tests.factories import CENTRAL, ARCADIA, HATFIELD, make_route
from .models import Route, RouteStop


class RouteStopTests(TestCase):
	def test_scoring_stops_use_primary_list(self):
		route = make_route(stops=(HATFIELD, CENTRAL))

		self.assertEqual([stop.order for stop in route.scoring_stops()], [1, 2])
		self.assertFalse(any(stop.is_enriched for stop in route.scoring_stops()))

	def test_enriched_stops_take_precedence(self):
		route = make_route(enriched=(CENTRAL, ARCADIA))

		stops = route.scoring_stops()

		self.assertEqual(len(stops), 2)
		self.assertTrue(all(stop.is_enriched for stop in stops))

	def test_order_unique_per_list(self):
		route = make_route()
		with self.assertRaises(IntegrityError):
			RouteStop.objects.create(
				route=route, stop_id='dup', name='Dup', latitude=0, longitude=0, order=1,
			)

	def test_active_queryset(self):
		make_route('PTA-001')
		make_route('PTA-002', is_active=False)

		self.assertEqual(list(Route.objects.active().values_list('route_id', flat=True)), ['PTA-001'])
