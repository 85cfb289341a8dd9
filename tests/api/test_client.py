from __future__ import annotations

import json

import httpx
import pytest
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_none

from scorebook.api.client import ScorebookClient
from scorebook.config import ApiSettings, create_config
from scorebook.domain.codes import WhyCode
from scorebook.domain.errors import DuplicateRequestError, TransportError
from scorebook.domain.result import Err, Ok
from scorebook.engine.record import PlateAppearanceRecord

_NO_WAIT_RETRY = retry(
    stop=stop_after_attempt(3),
    wait=wait_none(),
    retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
    reraise=True,
)

_SETTINGS = ApiSettings(base_url="http://scores.test", timeout=5.0, connect_timeout=1.0, retry_attempts=3)

_INNING_RESPONSE = {
    "scorebook_entries": [
        {
            "team_id": "team-1",
            "game_id": "game-1",
            "inning_number": 2,
            "home_or_away": "away",
            "batter_seq_id": 1,
            "batter_name": "Batter 1",
            "pa_why": "BB",
            "pa_result": 1,
            "balls_before_play": 3,
        },
        {
            "team_id": "team-1",
            "game_id": "game-1",
            "inning_number": 2,
            "home_or_away": "away",
            "batter_seq_id": 2,
            "batter_name": "Batter 2",
            "pa_why": "K",
            "pa_result": 0,
            "br_stolen_bases": "",
        },
    ]
}


class FakeTransport(httpx.BaseTransport):
    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response


class FailNTransport(httpx.BaseTransport):
    def __init__(self, fail_count: int, success_response: httpx.Response) -> None:
        self._fail_count = fail_count
        self._success_response = success_response
        self._call_count = 0

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self._call_count += 1
        if self._call_count <= self._fail_count:
            raise httpx.TransportError("connection failed")
        return self._success_response

    @property
    def call_count(self) -> int:
        return self._call_count


def _client(transport: httpx.BaseTransport) -> ScorebookClient:
    return ScorebookClient(_SETTINGS, client=httpx.Client(transport=transport), retry=_NO_WAIT_RETRY)


class TestLoadInning:
    def test_parses_entries(self) -> None:
        transport = FakeTransport(httpx.Response(200, json=_INNING_RESPONSE))
        result = _client(transport).load_inning("team-1", "game-1", 2, "away")

        assert isinstance(result, Ok)
        first, second = result.value
        assert first.why_code is WhyCode.BB
        assert first.pitch_count == 3
        assert second.out_flag == 1
        assert second.outcome().code == "K"
        assert str(transport.requests[0].url) == "http://scores.test/scores/team-1/game-1/inning/2/scorebook/away"
        assert transport.requests[0].method == "GET"

    def test_missing_entries_is_empty(self) -> None:
        transport = FakeTransport(httpx.Response(200, json={}))
        result = _client(transport).load_inning("team-1", "game-1", 1, "home")
        assert result == Ok([])

    def test_retries_transport_errors(self) -> None:
        transport = FailNTransport(2, httpx.Response(200, json=_INNING_RESPONSE))
        result = _client(transport).load_inning("team-1", "game-1", 2, "away")
        assert isinstance(result, Ok)
        assert transport.call_count == 3

    def test_exhausted_retries_become_err(self) -> None:
        transport = FailNTransport(5, httpx.Response(200, json=_INNING_RESPONSE))
        result = _client(transport).load_inning("team-1", "game-1", 2, "away")
        assert isinstance(result, Err)
        assert isinstance(result.error, TransportError)
        assert result.error.status_code is None
        assert transport.call_count == 3

    def test_http_status_error_carries_status(self) -> None:
        transport = FakeTransport(httpx.Response(404))
        result = _client(transport).load_inning("team-1", "game-1", 2, "away")
        assert isinstance(result, Err)
        assert result.error.status_code == 404
        assert result.error.url.endswith("/inning/2/scorebook/away")


class TestSave:
    def test_posts_flat_record(self, record: PlateAppearanceRecord) -> None:
        record.select_why(WhyCode.GO)
        transport = FakeTransport(httpx.Response(200, json={"ok": True}))
        result = _client(transport).save(record)

        assert isinstance(result, Ok)
        assert result.value.why_code is WhyCode.GO
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://scores.test/scores/team-1/game-1/inning/1/scorebook/away"
        body = json.loads(request.content)
        assert body["pa_why"] == "GO"
        assert body["out"] == 1

    def test_save_is_not_retried(self, record: PlateAppearanceRecord) -> None:
        transport = FailNTransport(1, httpx.Response(200, json={}))
        result = _client(transport).save(record)
        assert isinstance(result, Err)
        assert isinstance(result.error, TransportError)
        assert transport.call_count == 1

    def test_failed_save_releases_slot(self, record: PlateAppearanceRecord) -> None:
        transport = FailNTransport(1, httpx.Response(200, json={}))
        client = _client(transport)
        client.save(record)
        assert not client.is_saving(record.identity)
        assert isinstance(client.save(record), Ok)

    def test_duplicate_save_while_in_flight_rejected(self, record: PlateAppearanceRecord) -> None:
        outcomes: list[object] = []
        holder: dict[str, ScorebookClient] = {}

        class ReentrantTransport(httpx.BaseTransport):
            def handle_request(self, request: httpx.Request) -> httpx.Response:
                outcomes.append(holder["client"].save(record))
                return httpx.Response(200, json={})

        client = _client(ReentrantTransport())
        holder["client"] = client
        result = client.save(record)

        assert isinstance(result, Ok)
        assert len(outcomes) == 1
        duplicate = outcomes[0]
        assert isinstance(duplicate, Err)
        assert isinstance(duplicate.error, DuplicateRequestError)
        assert duplicate.error.request_key == record.identity.request_key


class TestDelete:
    def test_deletes_slot(self, record: PlateAppearanceRecord) -> None:
        transport = FakeTransport(httpx.Response(204))
        result = _client(transport).delete(record.identity)
        assert result == Ok(record.identity)
        assert transport.requests[0].method == "DELETE"
        assert str(transport.requests[0].url).endswith("/inning/1/scorebook/away/1")

    def test_delete_retries(self, record: PlateAppearanceRecord) -> None:
        transport = FailNTransport(1, httpx.Response(204))
        result = _client(transport).delete(record.identity)
        assert isinstance(result, Ok)
        assert transport.call_count == 2


class TestFromConfig:
    def test_uses_configured_base_url(self) -> None:
        cfg = create_config(yaml_path="/nonexistent/scorebook.yaml", base_url="http://override.test/")
        transport = FakeTransport(httpx.Response(200, json={}))
        client = ScorebookClient.from_config(cfg, client=httpx.Client(transport=transport))
        client.load_inning("a", "b", 1, "home")
        assert str(transport.requests[0].url).startswith("http://override.test/scores/a/b/")


@pytest.mark.parametrize("side", ["home", "away"])
def test_inning_url(side: str) -> None:
    client = ScorebookClient(_SETTINGS, client=httpx.Client(transport=FakeTransport(httpx.Response(200))))
    assert client.inning_url("t", "g", 5, side) == f"http://scores.test/scores/t/g/inning/5/scorebook/{side}"
