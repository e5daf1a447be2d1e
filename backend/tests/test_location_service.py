import httpx
import pytest

from conftest import HostRouter
from places_finder.core.exceptions import LocationError, LocationFailureReason
from places_finder.core.ip_providers import build_ip_providers
from places_finder.models.location_model import AcquisitionMethod, SensorFailure, SensorReading
from places_finder.services.Location_service import (
    LocationService,
    PositionSensor,
    SensorError,
    UnsupportedSensor,
    classify_sensor_error,
)


class ScriptedSensor(PositionSensor):
    """Replays one outcome per read and records the read options."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    @property
    def supported(self) -> bool:
        return True

    async def read(self, high_accuracy, timeout_ms, max_cache_age_ms):
        self.calls.append((high_accuracy, timeout_ms, max_cache_age_ms))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _reading(accuracy):
    return SensorReading(lat=28.6139, lng=77.2090, accuracy_meters=accuracy)


def _ip_router():
    return HostRouter({
        "ipapi.co": lambda request: httpx.Response(500),
        "ipinfo.io": lambda request: httpx.Response(200, json={
            "loc": "28.6519,77.2315", "city": "Delhi", "region": "Delhi", "country": "IN",
        }),
    })


def _service(sensor, router=None, secure_context=True):
    router = router or _ip_router()
    providers = build_ip_providers(["ipapi.co", "ipinfo.io", "ip-api.com"], transport=router.transport())
    return LocationService(sensor=sensor, ip_providers=providers, secure_context=secure_context)


@pytest.mark.asyncio
@pytest.mark.parametrize("accuracy, method", [
    (20, AcquisitionMethod.HIGH_ACCURACY_SENSOR),
    (500, AcquisitionMethod.MODERATE_ACCURACY),
    (4000, AcquisitionMethod.POOR_ACCURACY),
])
async def test_first_tier_classification(accuracy, method):
    sensor = ScriptedSensor([_reading(accuracy)])

    fix = await _service(sensor).acquire_location()

    assert fix.method == method
    assert fix.accuracy_meters == accuracy
    assert sensor.calls == [(True, 5000, 0)]


@pytest.mark.asyncio
async def test_tiers_run_in_order():
    sensor = ScriptedSensor([
        SensorError(SensorFailure.TIMEOUT),
        SensorError(SensorFailure.POSITION_UNAVAILABLE),
        _reading(30),
    ])

    fix = await _service(sensor).acquire_location()

    assert fix.method == AcquisitionMethod.FINAL_ATTEMPT
    assert sensor.calls == [(True, 5000, 0), (False, 3000, 0), (True, 15000, 0)]


@pytest.mark.asyncio
@pytest.mark.parametrize("accuracy, method", [
    (80, AcquisitionMethod.DELAYED_SENSOR),
    (900, AcquisitionMethod.CELL_ASSISTED),
])
async def test_second_tier_classification(accuracy, method):
    sensor = ScriptedSensor([SensorError(SensorFailure.TIMEOUT), _reading(accuracy)])

    fix = await _service(sensor).acquire_location()

    assert fix.method == method


@pytest.mark.asyncio
async def test_all_tiers_failing_reports_last_reason():
    sensor = ScriptedSensor([
        SensorError(SensorFailure.TIMEOUT),
        SensorError(SensorFailure.TIMEOUT),
        SensorError(SensorFailure.PERMISSION_DENIED),
    ])

    with pytest.raises(LocationError) as exc_info:
        await _service(sensor).acquire_location()

    assert exc_info.value.reason == LocationFailureReason.PERMISSION_DENIED
    assert "allow location access" in exc_info.value.suggestion
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_unsupported_sensor_uses_ip_providers_in_order():
    router = _ip_router()

    fix = await _service(UnsupportedSensor(), router).acquire_location()

    assert router.hosts == ["ipapi.co", "ipinfo.io"]
    assert fix.method == AcquisitionMethod.IP_ESTIMATE
    assert fix.accuracy_meters == 5000
    assert fix.coordinate.lat == pytest.approx(28.6519)
    assert fix.city_label == "Delhi, Delhi, IN"


@pytest.mark.asyncio
async def test_insecure_context_skips_sensor():
    sensor = ScriptedSensor([_reading(10)])

    fix = await _service(sensor, secure_context=False).acquire_location()

    assert sensor.calls == []
    assert fix.method == AcquisitionMethod.IP_ESTIMATE


@pytest.mark.asyncio
async def test_ip_api_com_failure_status():
    router = HostRouter({
        "ip-api.com": lambda request: httpx.Response(200, json={"status": "fail", "message": "reserved range"}),
    })

    with pytest.raises(LocationError) as exc_info:
        await _service(UnsupportedSensor(), router).acquire_ip_location()

    assert exc_info.value.reason == LocationFailureReason.UNAVAILABLE
    assert router.hosts == ["ipapi.co", "ipinfo.io", "ip-api.com"]


def test_support_check_lists_issues():
    support = _service(UnsupportedSensor(), secure_context=False).check_location_support()
    assert support.supported is False
    assert len(support.issues) == 2


def test_classify_sensor_error():
    assert classify_sensor_error(SensorError(SensorFailure.TIMEOUT)) == LocationFailureReason.TIMEOUT
    assert classify_sensor_error(RuntimeError("boom")) == LocationFailureReason.UNKNOWN
    assert classify_sensor_error(None) == LocationFailureReason.UNKNOWN


def test_manual_fix(new_delhi):
    fix = LocationService.manual_fix(new_delhi, "Connaught Place")
    assert fix.method == AcquisitionMethod.MANUAL_ENTRY
    assert fix.accuracy_meters is None
    assert fix.city_label == "Connaught Place"
