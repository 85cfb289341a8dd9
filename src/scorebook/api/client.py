from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import httpx

from scorebook.api._retry import default_http_retry
from scorebook.api.mapping import from_api, to_api
from scorebook.config import ApiSettings, load_api_settings
from scorebook.domain.errors import DuplicateRequestError, ScorebookError, TransportError
from scorebook.domain.result import Err, Ok, Result

if TYPE_CHECKING:
    from config import ConfigurationSet

    from scorebook.engine.record import PlateAppearanceRecord, PlateAppearanceSnapshot, SlotIdentity

logger = logging.getLogger(__name__)


def _transport_error(url: str, exc: httpx.HTTPError) -> TransportError:
    status_code = exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
    return TransportError(message=str(exc), url=url, status_code=status_code)


class ScorebookClient:
    """Loads, saves and deletes plate appearances on the scoring API.

    Loads and deletes are idempotent and go through the retry policy. Saves
    are sent exactly once; a second save for the same slot while the first
    is still outstanding is refused instead of being queued.
    """

    def __init__(
        self,
        settings: ApiSettings,
        client: httpx.Client | None = None,
        retry: Callable[..., Callable[..., Any]] | None = None,
    ) -> None:
        self._settings = settings
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout)
        )
        if retry is None:
            retry = default_http_retry("scorebook_api", attempts=settings.retry_attempts)
        self._get_with_retry = retry(self._do_get)
        self._delete_with_retry = retry(self._do_delete)
        self._in_flight: set[str] = set()

    @classmethod
    def from_config(cls, cfg: ConfigurationSet | None = None, client: httpx.Client | None = None) -> ScorebookClient:
        return cls(load_api_settings(cfg), client=client)

    def inning_url(self, team_id: str, game_id: str, inning_number: int, home_or_away: str) -> str:
        return f"{self._settings.base_url}/scores/{team_id}/{game_id}/inning/{inning_number}/scorebook/{home_or_away}"

    def slot_url(self, identity: SlotIdentity) -> str:
        base = self.inning_url(identity.team_id, identity.game_id, identity.inning_number, identity.home_or_away)
        return f"{base}/{identity.batter_seq_id}"

    def load_inning(
        self, team_id: str, game_id: str, inning_number: int, home_or_away: str
    ) -> Result[list[PlateAppearanceRecord], TransportError]:
        url = self.inning_url(team_id, game_id, inning_number, home_or_away)
        try:
            data = self._get_with_retry(url)
        except httpx.HTTPError as exc:
            logger.warning("Failed to load %s: %s", url, exc)
            return Err(_transport_error(url, exc))
        entries = (data.get("scorebook_entries") or []) if isinstance(data, dict) else []
        records = [from_api(entry) for entry in entries if isinstance(entry, dict)]
        logger.debug("Loaded %d plate appearances from %s", len(records), url)
        return Ok(records)

    def save(self, record: PlateAppearanceRecord) -> Result[PlateAppearanceSnapshot, ScorebookError]:
        key = record.identity.request_key
        if key in self._in_flight:
            logger.info("Ignoring duplicate save for %s", key)
            return Err(
                DuplicateRequestError(message="A save for this plate appearance is already in flight", request_key=key)
            )

        identity = record.identity
        url = self.inning_url(identity.team_id, identity.game_id, identity.inning_number, identity.home_or_away)
        snapshot = record.snapshot()
        self._in_flight.add(key)
        try:
            response = self._client.post(url, json=to_api(record))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Failed to save %s: %s", key, exc)
            return Err(_transport_error(url, exc))
        finally:
            self._in_flight.discard(key)
        logger.debug("Saved %s", key)
        return Ok(snapshot)

    def delete(self, identity: SlotIdentity) -> Result[SlotIdentity, TransportError]:
        url = self.slot_url(identity)
        try:
            self._delete_with_retry(url)
        except httpx.HTTPError as exc:
            logger.warning("Failed to delete %s: %s", identity.request_key, exc)
            return Err(_transport_error(url, exc))
        logger.debug("Deleted %s", identity.request_key)
        return Ok(identity)

    def is_saving(self, identity: SlotIdentity) -> bool:
        return identity.request_key in self._in_flight

    def close(self) -> None:
        self._client.close()

    def _do_get(self, url: str) -> Any:
        response = self._client.get(url)
        response.raise_for_status()
        return response.json()

    def _do_delete(self, url: str) -> None:
        response = self._client.delete(url)
        response.raise_for_status()
