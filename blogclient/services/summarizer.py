# blogclient/services/summarizer.py
import logging

import httpx
from pydantic import ValidationError

from blogclient.core.errors import NetworkTimeout, SummarizerError
from blogclient.schemas.summary import SummaryRequest, SummaryResponse

logger = logging.getLogger(__name__)

PROCESS_TEXT_PATH = "/process-text"


class SummarizerClient:
    """
    Client for the remote text summarization backend.

    Best-effort: failures are raised as SummarizerError and never touch
    session state.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def summarize(self, text: str, sentence_count: int = 3) -> str:
        """
        Summarize `text` into roughly `sentence_count` sentences.

        Raises:
            NetworkTimeout: the backend did not answer in time.
            SummarizerError: HTTP error, connection error or bad payload.
        """
        payload = SummaryRequest(text=text, num_sentences=sentence_count)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self._base_url}{PROCESS_TEXT_PATH}",
                    headers={"Content-Type": "application/json"},
                    json=payload.model_dump(),
                )
        except httpx.TimeoutException as e:
            logger.warning("Summarizer timed out after %ss", self._timeout)
            raise NetworkTimeout() from e
        except httpx.RequestError as e:
            logger.warning("Summarizer request error: %s", e)
            raise SummarizerError(f"Failed to reach summarizer: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "Summarizer error: %s - %s", response.status_code, response.text
            )
            raise SummarizerError(
                f"HTTP {response.status_code}: {response.reason_phrase}"
            )

        try:
            return SummaryResponse.model_validate(response.json()).summary
        except (ValueError, ValidationError) as e:
            raise SummarizerError("Malformed summarizer response") from e
