import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from places_finder.core.config import settings
from places_finder.core.exceptions import CascadeExhausted, LocationError, LocationFailureReason
from places_finder.core.fallback import first_success
from places_finder.core.ip_providers import BaseIPLocationProvider, build_ip_providers
from places_finder.core.logger import logs
from places_finder.models.base_model import Coordinate
from places_finder.models.location_model import (
    AcquisitionMethod,
    LocationFix,
    LocationSupport,
    SensorFailure,
    SensorReading,
)

HIGH_ACCURACY_METERS = 100
MODERATE_ACCURACY_METERS = 1000


class SensorError(Exception):
    def __init__(self, reason: SensorFailure, message: str = ""):
        super().__init__(message or reason.value)
        self.reason = reason


class PositionSensor(ABC):
    """A device position source (GPS, network location, a relayed reading)"""

    @property
    @abstractmethod
    def supported(self) -> bool:
        pass

    @abstractmethod
    async def read(self, high_accuracy: bool, timeout_ms: int, max_cache_age_ms: int) -> SensorReading:
        """Return a fresh reading or raise SensorError"""
        pass


class UnsupportedSensor(PositionSensor):
    """Default on a server: there is no device to read."""

    @property
    def supported(self) -> bool:
        return False

    async def read(self, high_accuracy: bool, timeout_ms: int, max_cache_age_ms: int) -> SensorReading:
        raise SensorError(SensorFailure.POSITION_UNAVAILABLE, "no position sensor available")


class ReportedPositionSensor(PositionSensor):
    """Serves a reading a client obtained on its own device."""

    def __init__(self, reading: SensorReading):
        self.reading = reading

    @property
    def supported(self) -> bool:
        return True

    async def read(self, high_accuracy: bool, timeout_ms: int, max_cache_age_ms: int) -> SensorReading:
        return self.reading


def _tier_a_method(accuracy: float) -> AcquisitionMethod:
    if accuracy <= HIGH_ACCURACY_METERS:
        return AcquisitionMethod.HIGH_ACCURACY_SENSOR
    if accuracy <= MODERATE_ACCURACY_METERS:
        return AcquisitionMethod.MODERATE_ACCURACY
    return AcquisitionMethod.POOR_ACCURACY


def _tier_b_method(accuracy: float) -> AcquisitionMethod:
    if accuracy <= HIGH_ACCURACY_METERS:
        return AcquisitionMethod.DELAYED_SENSOR
    return AcquisitionMethod.CELL_ASSISTED


def _tier_c_method(accuracy: float) -> AcquisitionMethod:
    return AcquisitionMethod.FINAL_ATTEMPT


# (name, high_accuracy, timeout_ms, classifier); max cache age is always 0
SENSOR_TIERS = (
    ("high-accuracy", True, 5000, _tier_a_method),
    ("low-accuracy", False, 3000, _tier_b_method),
    ("final-attempt", True, 15000, _tier_c_method),
)

_REASONS = {
    SensorFailure.PERMISSION_DENIED: LocationFailureReason.PERMISSION_DENIED,
    SensorFailure.POSITION_UNAVAILABLE: LocationFailureReason.POSITION_UNAVAILABLE,
    SensorFailure.TIMEOUT: LocationFailureReason.TIMEOUT,
}


def classify_sensor_error(error: Optional[BaseException]) -> LocationFailureReason:
    if isinstance(error, SensorError):
        return _REASONS.get(error.reason, LocationFailureReason.UNKNOWN)
    if isinstance(error, asyncio.TimeoutError):
        return LocationFailureReason.TIMEOUT
    return LocationFailureReason.UNKNOWN


class LocationService:
    def __init__(
        self,
        sensor: Optional[PositionSensor] = None,
        ip_providers: Optional[List[BaseIPLocationProvider]] = None,
        secure_context: Optional[bool] = None,
    ):
        self.sensor = sensor or UnsupportedSensor()
        if ip_providers is None:
            ip_providers = build_ip_providers(settings.IP_PROVIDERS, timeout=settings.IP_LOOKUP_TIMEOUT)
        self.ip_providers = ip_providers
        self.secure_context = settings.SECURE_CONTEXT if secure_context is None else secure_context

    def check_location_support(self) -> LocationSupport:
        issues = []
        if not self.sensor.supported:
            issues.append("Geolocation sensor not supported")
        if not self.secure_context:
            issues.append("HTTPS required for location access")
        return LocationSupport(supported=not issues, issues=issues)

    async def acquire_location(self) -> LocationFix:
        """
        Sensor tiers A -> B -> C, strictly one after another. An unsupported
        sensor or insecure context goes straight to IP estimation.
        """
        support = self.check_location_support()
        if not support.supported:
            logs.log(logging.INFO, f"🌐 Sensor unavailable ({'; '.join(support.issues)}), trying IP-based location")
            return await self.acquire_ip_location()

        attempts = [
            (name, self._tier_attempt(high_accuracy, timeout_ms, classifier))
            for name, high_accuracy, timeout_ms, classifier in SENSOR_TIERS
        ]
        try:
            return await first_success(attempts, label="location sensor")
        except CascadeExhausted as e:
            reason = classify_sensor_error(e.last_error)
            logs.log(logging.ERROR, f"❌ All sensor tiers failed: {reason.value}")
            raise LocationError(reason) from e

    def _tier_attempt(self, high_accuracy: bool, timeout_ms: int, classifier):
        async def attempt() -> LocationFix:
            try:
                reading = await asyncio.wait_for(
                    self.sensor.read(high_accuracy=high_accuracy, timeout_ms=timeout_ms, max_cache_age_ms=0),
                    timeout=timeout_ms / 1000,
                )
            except asyncio.TimeoutError:
                raise SensorError(SensorFailure.TIMEOUT, f"no fix within {timeout_ms}ms")

            method = classifier(reading.accuracy_meters)
            if method == AcquisitionMethod.POOR_ACCURACY:
                logs.log(logging.WARNING, f"⚠️ Poor accuracy ({reading.accuracy_meters}m), using sensor location anyway")
            return LocationFix(
                coordinate=Coordinate(lat=reading.lat, lng=reading.lng),
                accuracy_meters=reading.accuracy_meters,
                method=method
            )
        return attempt

    async def acquire_ip_location(self) -> LocationFix:
        attempts = [(provider.get_provider_name(), provider.locate) for provider in self.ip_providers]
        try:
            fix = await first_success(attempts, label="IP location")
        except CascadeExhausted as e:
            raise LocationError(LocationFailureReason.UNAVAILABLE) from e
        logs.log(logging.INFO, f"✅ IP location found: {fix.coordinate.lat}, {fix.coordinate.lng} ({fix.city_label})")
        return fix

    @staticmethod
    def manual_fix(coordinate: Coordinate, label: Optional[str] = None) -> LocationFix:
        return LocationFix(coordinate=coordinate, method=AcquisitionMethod.MANUAL_ENTRY, city_label=label)
