import httpx
import pytest

from buildings_api.core.exceptions import (
    GeocodeResultNotFound,
    GeocoderUpstreamError,
    InvalidGeocodeRequest,
    InvalidGeocodeResponseFormat,
)
from buildings_api.services.geocoding import (
    GeocoderBackend,
    GeocodingService,
    StaticGeocoder,
    SwisstopoGeocoder,
    parse_label,
)


class RecordingBackend(GeocoderBackend):
    def __init__(self, results):
        self.results = results
        self.calls = []

    async def lookup(self, query, limit):
        self.calls.append((query, limit))
        return self.results


@pytest.fixture
def seven(geocode_results):
    return StaticGeocoder({"main st": geocode_results(7)})


@pytest.mark.anyio
async def test_static_lookup_is_case_insensitive(geocoder):
    results = await GeocodingService(geocoder).geocode("BerninaStrasse")

    assert len(results) == 3
    assert results[0].address.city == "Möhlin"
    assert results[0].address.country_code == "CH"


@pytest.mark.anyio
async def test_default_limit_applies_when_omitted(seven):
    results = await GeocodingService(seven).geocode("Main St")

    assert len(results) == 5


@pytest.mark.anyio
async def test_explicit_limit_truncates(seven):
    results = await GeocodingService(seven).geocode("main st", limit=3)

    assert [r.address.line1 for r in results] == ["Main St 1", "Main St 2", "Main St 3"]


@pytest.mark.anyio
async def test_limit_is_capped_at_absolute_maximum(geocode_results):
    backend = StaticGeocoder({"x": geocode_results(12)})

    results = await GeocodingService(backend, default_limit=50).geocode("x")

    assert len(results) == 10


@pytest.mark.anyio
async def test_limit_above_ten_is_rejected_before_lookup():
    backend = RecordingBackend([])

    with pytest.raises(InvalidGeocodeRequest) as exc_info:
        await GeocodingService(backend).geocode("Main St", limit=20)

    assert backend.calls == []
    assert exc_info.value.details[0]["path"] == "body/limit"


@pytest.mark.anyio
async def test_empty_search_text_is_rejected():
    with pytest.raises(InvalidGeocodeRequest):
        await GeocodingService(RecordingBackend([])).geocode("")


@pytest.mark.anyio
async def test_unmatched_query_is_not_found(geocoder):
    with pytest.raises(GeocodeResultNotFound) as exc_info:
        await GeocodingService(geocoder).geocode("Nonexistent Address")

    assert exc_info.value.message == 'No geocoding results found for "Nonexistent Address".'


@pytest.mark.anyio
async def test_malformed_backend_result_is_reported():
    backend = RecordingBackend([{"address": {"line1": "Somewhere"}}])

    with pytest.raises(InvalidGeocodeResponseFormat):
        await GeocodingService(backend).geocode("somewhere")


# ── swisstopo backend ─────────────────────────────────────────────────────

SEARCH_URL = "https://geo.example/SearchServer"


def _swisstopo(handler) -> SwisstopoGeocoder:
    return SwisstopoGeocoder(url=SEARCH_URL, timeout=1.0, transport=httpx.MockTransport(handler))


def test_parse_label_with_markup():
    assert parse_label("Berninastrasse 1 <b>4313 Möhlin</b>") == ("Berninastrasse 1", "4313", "Möhlin")


def test_parse_label_without_markup():
    assert parse_label("Bahnhofstrasse 10 8001 Zürich") == ("Bahnhofstrasse 10", "8001", "Zürich")


def test_parse_label_rejects_text_without_postcode():
    with pytest.raises(InvalidGeocodeResponseFormat):
        parse_label("Somewhere without numbers")


@pytest.mark.anyio
async def test_swisstopo_results_are_parsed():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json={"results": [
            {"attrs": {"label": "Berninastrasse 1 <b>4313 Möhlin</b>", "lat": 47.5579, "lon": 7.8503}},
            {"attrs": {"label": "Berninastrasse 2 <b>8057 Zürich</b>", "lat": 47.4026, "lon": 8.5529}},
        ]})

    results = await GeocodingService(_swisstopo(handler)).geocode("berninastrasse", limit=1)

    assert seen["searchText"] == "berninastrasse"
    assert seen["type"] == "locations"
    assert len(results) == 1
    assert results[0].address.model_dump(by_alias=True) == {
        "line1": "Berninastrasse 1",
        "postCode": "4313",
        "city": "Möhlin",
        "countryCode": "CH",
    }
    assert results[0].coordinates.lat == 47.5579


@pytest.mark.anyio
async def test_swisstopo_empty_results_are_not_found():
    backend = _swisstopo(lambda request: httpx.Response(200, json={"results": []}))

    with pytest.raises(GeocodeResultNotFound):
        await GeocodingService(backend).geocode("nowhere")


@pytest.mark.anyio
async def test_swisstopo_upstream_failure_is_gateway_error():
    backend = _swisstopo(lambda request: httpx.Response(503, text="down"))

    with pytest.raises(GeocoderUpstreamError) as exc_info:
        await backend.lookup("berninastrasse", 5)

    assert exc_info.value.status_code == 502


@pytest.mark.anyio
async def test_swisstopo_connection_error_is_gateway_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GeocoderUpstreamError):
        await _swisstopo(handler).lookup("berninastrasse", 5)


@pytest.mark.anyio
async def test_swisstopo_missing_label_is_format_error():
    backend = _swisstopo(lambda request: httpx.Response(200, json={"results": [{"attrs": {"lat": 1, "lon": 2}}]}))

    with pytest.raises(InvalidGeocodeResponseFormat):
        await backend.lookup("berninastrasse", 5)
