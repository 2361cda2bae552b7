from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIRequestFactory

from .views import health_check


class HealthCheckTests(TestCase):
	@patch('dispatch_backend.views.redis.Redis.from_url')
	def test_healthy(self, mock_redis):
		response = health_check(APIRequestFactory().get('/health/'))

		self.assertEqual(response.status_code, 200)
		self.assertEqual(response.data['services']['database'], 'healthy')
		self.assertEqual(response.data['active_rides'], 0)

	@patch('dispatch_backend.views.redis.Redis.from_url', side_effect=ConnectionError('refused'))
	def test_redis_down(self, mock_redis):
		response = health_check(APIRequestFactory().get('/health/'))

		self.assertEqual(response.status_code, 503)
		self.assertIn('unhealthy', response.data['services']['redis'])
