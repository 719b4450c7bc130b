"""Redis Streams response sink."""
from typing import Iterable
import structlog
import orjson
from redis import Redis
from redis.exceptions import RedisError
from .base import MAX_RESPONSES, ResponseSink
from ..event_models import Event
from ..config import get_settings

log = structlog.get_logger()
settings = get_settings()


class RedisStreamSink(ResponseSink):
    """Posts responses to a Redis stream read by the upstream provider."""

    def __init__(self, redis_url: str | None = None, stream_key: str | None = None):
        """
        Args:
            redis_url: Redis connection URL (defaults to settings.REDIS_URL)
            stream_key: Stream to append to (defaults to settings.RESPONSE_STREAM_KEY)
        """
        self.redis_url = redis_url or str(settings.REDIS_URL)
        self._stream_key = stream_key or settings.RESPONSE_STREAM_KEY
        self._client: Redis | None = None

    def _get_client(self) -> Redis:
        if self._client is None:
            self._client = Redis.from_url(
                self.redis_url,
                decode_responses=False,
                socket_connect_timeout=5,
                socket_timeout=5
            )
        return self._client

    async def post_response(self, event: Event) -> None:
        """
        Append the response to the stream.

        Raises:
            RedisError: If unable to write to Redis
        """
        try:
            client = self._get_client()
            client.xadd(
                self._stream_key,
                {"data": orjson.dumps(event.model_dump(mode="json"))},
                id="*",
                maxlen=MAX_RESPONSES
            )
            log.info(
                "response.posted",
                corr_id=event.corr_id,
                status=event.status.value,
                records=len(event.data),
                sink="redis_stream"
            )
        except RedisError as e:
            log.error("redis.post_failed", error=str(e), corr_id=event.corr_id)
            raise

    async def list_recent(self, limit: int = 50) -> Iterable[Event]:
        try:
            client = self._get_client()
            entries = client.xrevrange(self._stream_key, count=limit)

            events = []
            for entry_id, entry_data in entries:
                if b"data" in entry_data:
                    events.append(Event(**orjson.loads(entry_data[b"data"])))
            return events

        except RedisError as e:
            log.error("redis.list_failed", error=str(e))
            return []

    async def health_check(self) -> bool:
        try:
            return bool(self._get_client().ping())
        except Exception as e:
            log.warning("redis.health_check_failed", error=str(e))
            return False

    def close(self):
        """Close Redis connection."""
        if self._client:
            self._client.close()
            self._client = None
