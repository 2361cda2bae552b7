"""Model builders shared by the service and app tests."""

from decimal import Decimal

from accounts.models import User
from drivers.models import DriverProfile, Taxi
from locations.models import LocationSample
from rides.models import Ride
from routes.models import Route, RouteStop

# Pretoria: Church Square -> Arcadia -> Hatfield
CENTRAL = (-25.7461, 28.1881)
ARCADIA = (-25.7449, 28.2100)
HATFIELD = (-25.7487, 28.2380)

# Degrees of latitude per kilometre on a 6371 km sphere
KM_PER_DEGREE_LAT = 111.19492664455873


def north_of(point, km):
	return (point[0] + km / KM_PER_DEGREE_LAT, point[1])


def make_user(username, role='passenger', **extra):
	return User.objects.create_user(
		username=username,
		password='pass1234',
		role=role,
		phone_number=extra.pop('phone_number', '0820000000'),
		**extra
	)


def make_route(route_id='PTA-001', stops=(CENTRAL, ARCADIA, HATFIELD), enriched=(), fare='15.00', **extra):
	route = Route.objects.create(
		route_id=route_id,
		name=extra.pop('name', 'Pretoria Central - Hatfield'),
		fare=Decimal(fare),
		estimated_duration=extra.pop('estimated_duration', 25),
		taxi_association=extra.pop('taxi_association', 'Tshwane Taxi Association'),
		**extra
	)
	for order, (lat, lon) in enumerate(stops, start=1):
		RouteStop.objects.create(
			route=route, stop_id=f'{route_id}-S{order}', name=f'Stop {order}',
			latitude=lat, longitude=lon, order=order,
		)
	for order, (lat, lon) in enumerate(enriched, start=1):
		RouteStop.objects.create(
			route=route, stop_id=f'{route_id}-E{order}', name=f'Waypoint {order}',
			latitude=lat, longitude=lon, order=order, is_enriched=True,
		)
	return route


def make_driver(username, route=None, location=None, plate=None):
	user = make_user(username, role='driver')
	profile = DriverProfile.objects.create(
		user=user,
		assigned_route=route,
		taxi_association='Tshwane Taxi Association',
	)
	if plate:
		Taxi.objects.create(driver=profile, license_plate=plate, model='Toyota Quantum', color='White', year=2019)
	if location:
		set_location(user, location, role='driver')
	return user


def set_location(user, point, role=None):
	sample, _ = LocationSample.objects.update_or_create(
		user=user,
		defaults={'latitude': point[0], 'longitude': point[1], 'role': role or user.role},
	)
	return sample


def make_ride(passenger, driver=None, status=Ride.REQUESTED, start=CENTRAL, end=HATFIELD, **extra):
	return Ride.objects.create(
		passenger=passenger,
		driver=driver,
		start_latitude=start[0],
		start_longitude=start[1],
		end_latitude=end[0],
		end_longitude=end[1],
		start_address=extra.pop('start_address', 'Church Square'),
		end_address=extra.pop('end_address', 'Hatfield Plaza'),
		status=status,
		**extra
	)
