import logging
from enum import Enum
from typing import Callable, Iterable, Optional, Protocol

from .utils.notifications import Notifier

logger = logging.getLogger(__name__)


def filter_products(products: Iterable[dict], text: Optional[str]) -> list[dict]:
    """Case-insensitive substring match on name and description. Blank text keeps everything."""
    needle = (text or "").strip().lower()
    if not needle:
        return list(products)
    return [
        p
        for p in products
        if needle in (p.get("name") or "").lower() or needle in (p.get("description") or "").lower()
    ]


class SpeechRecognizer(Protocol):
    def start(
        self,
        language: str,
        continuous: bool,
        on_result: Callable[[str], None],
        on_error: Callable[[str], None],
    ) -> None: ...

    def stop(self) -> None: ...


class RelayedRecognizer:
    """
    Recognizer for speech captured on the client.

    The browser runs the recognition and sends back either a transcript or
    an error code; starting this recognizer replays that outcome. With
    neither, the search stays listening until the client reports again.
    """

    def __init__(self, transcript: Optional[str] = None, error: Optional[str] = None):
        self.transcript = transcript
        self.error = error

    def start(self, language, continuous, on_result, on_error) -> None:
        if self.error:
            on_error(self.error)
        elif self.transcript is not None:
            on_result(self.transcript)

    def stop(self) -> None:
        pass


class VoiceState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"


class VoiceSearch:
    """
    Single-shot voice search.

    idle -> listening on `start()`, back to idle on a result, an error or
    `stop()`. A result is handed to `on_transcript`, which the owner uses as
    its filter text. A missing recognizer means the platform has no speech
    support; that is reported, not raised.
    """

    def __init__(
        self,
        recognizer: Optional[SpeechRecognizer],
        notifier: Notifier,
        on_transcript: Callable[[str], None],
        language: str = "en-US",
    ):
        self._recognizer = recognizer
        self._notifier = notifier
        self._on_transcript = on_transcript
        self.language = language
        self.state = VoiceState.IDLE

    @property
    def supported(self) -> bool:
        return self._recognizer is not None

    def start(self) -> bool:
        if self._recognizer is None:
            self._notifier.error("Voice search is not supported on this device.")
            return False
        if self.state is VoiceState.LISTENING:
            return False

        self.state = VoiceState.LISTENING
        try:
            self._recognizer.start(
                language=self.language,
                continuous=False,
                on_result=self.on_result,
                on_error=self.on_error,
            )
        except Exception as exc:
            self.on_error(str(exc))
            return False
        return True

    def stop(self) -> None:
        if self.state is not VoiceState.LISTENING:
            return
        self.state = VoiceState.IDLE
        self._recognizer.stop()

    def on_result(self, transcript: str) -> None:
        if self.state is not VoiceState.LISTENING:
            logger.debug("Dropping late voice result: %r", transcript)
            return
        self.state = VoiceState.IDLE
        text = transcript.strip()
        self._on_transcript(text)
        self._notifier.info(f'Searching for "{text}"')

    def on_error(self, error: str) -> None:
        self.state = VoiceState.IDLE
        self._notifier.error(f"Voice search error: {error}")
