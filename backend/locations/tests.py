from django.test import TestCase
from rest_framework.test import APIRequestFactory, force_authenticate

from services.tests.factories import make_user
from .models import LocationSample
from .views import MyLocationView


class MyLocationViewTests(TestCase):
	def setUp(self):
		self.factory = APIRequestFactory()
		self.view = MyLocationView.as_view()
		self.driver = make_user('thabo', role='driver')

	def put(self, data):
		request = self.factory.put('/api/locations/me/', data, format='json')
		force_authenticate(request, user=self.driver)
		return self.view(request)

	def test_update_overwrites_single_sample(self):
		self.put({'latitude': -25.7461, 'longitude': 28.1881})
		response = self.put({'latitude': -25.7449, 'longitude': 28.2100})

		self.assertEqual(response.status_code, 200)
		self.assertEqual(LocationSample.objects.filter(user=self.driver).count(), 1)
		sample = LocationSample.objects.latest_for(self.driver.id)
		self.assertEqual(sample.coordinates, (-25.7449, 28.2100))
		self.assertEqual(sample.role, 'driver')

	def test_rejects_out_of_range(self):
		response = self.put({'latitude': 95, 'longitude': 28.1881})

		self.assertEqual(response.status_code, 400)
		self.assertFalse(LocationSample.objects.exists())

	def test_get_without_sample(self):
		request = self.factory.get('/api/locations/me/')
		force_authenticate(request, user=self.driver)

		self.assertEqual(self.view(request).status_code, 404)
