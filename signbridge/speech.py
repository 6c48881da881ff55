"""
Text-to-speech and speech-to-text through Eleven Labs.
"""
import logging
import os
import threading
from typing import BinaryIO, List, Optional, Union

from dotenv import load_dotenv
from elevenlabs.client import ElevenLabs
from elevenlabs.play import play

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

API_KEY_ENV = "ELEVEN_LABS_API_KEY"
DEFAULT_VOICE_ID = "JBFqnCBsd6RMkjVDRZzb"  # George
DEFAULT_TTS_MODEL = "eleven_turbo_v2_5"
DEFAULT_STT_MODEL = "scribe_v1"


def _client_from_env(api_key: Optional[str]) -> ElevenLabs:
    api_key = api_key or os.getenv(API_KEY_ENV)
    if not api_key:
        raise ValueError(f"{API_KEY_ENV} not found in environment variables")
    return ElevenLabs(api_key=api_key)


class ElevenLabsSpeaker:
    """
    Speaks phrases with Eleven Labs TTS.

    Playback runs on a background thread so the camera loop keeps going.
    Phrases play one at a time. A newer phrase or cancel() drops anything
    that has not started playing yet.
    """

    def __init__(self, api_key: Optional[str] = None, voice_id: str = DEFAULT_VOICE_ID,
                 model_id: str = DEFAULT_TTS_MODEL, output_format: str = "mp3_22050_32",
                 background: bool = True, client: Optional[ElevenLabs] = None):
        self.client = client or _client_from_env(api_key)
        self.voice_id = voice_id
        self.model_id = model_id
        self.output_format = output_format
        self.background = background
        self._generation = 0
        self._lock = threading.Lock()
        self._play_lock = threading.Lock()

    def speak(self, text: str) -> None:
        """Say text out loud. Failures are logged; speech is best-effort."""
        if not text or not text.strip():
            return

        with self._lock:
            self._generation += 1
            generation = self._generation

        if self.background:
            threading.Thread(target=self._speak, args=(text, generation), daemon=True).start()
        else:
            self._speak(text, generation)

    def cancel(self) -> None:
        """Drop pending speech. Audio already playing runs to the end."""
        with self._lock:
            self._generation += 1

    def synthesize(self, text: str) -> bytes:
        audio_generator = self.client.text_to_speech.convert(
            text=text,
            voice_id=self.voice_id,
            model_id=self.model_id,
            output_format=self.output_format,
        )
        return b"".join(audio_generator)

    def _speak(self, text: str, generation: int) -> None:
        try:
            audio_bytes = self.synthesize(text)
        except Exception as e:
            logger.error(f"Speech synthesis failed for {text!r}: {e}")
            return

        # one phrase plays at a time; a phrase superseded while waiting is dropped
        with self._play_lock:
            if generation != self._generation:
                logger.debug(f"Skipping stale phrase {text!r}")
                return

            try:
                play(audio_bytes)
            except Exception as e:
                logger.warning(f"Could not play audio ({len(audio_bytes)} bytes): {e}")


class ElevenLabsTranscriber:
    """Turns recorded speech into text with Eleven Labs speech-to-text."""

    def __init__(self, api_key: Optional[str] = None, model_id: str = DEFAULT_STT_MODEL,
                 language_code: str = "eng", client: Optional[ElevenLabs] = None):
        self.client = client or _client_from_env(api_key)
        self.model_id = model_id
        self.language_code = language_code

    def transcribe(self, audio: Union[bytes, BinaryIO]) -> str:
        """
        Transcribe a recording.

        Args:
            audio: WAV/MP3 bytes or an open binary file

        Returns:
            The recognized text, stripped
        """
        transcription = self.client.speech_to_text.convert(
            file=audio,
            model_id=self.model_id,
            tag_audio_events=False,
            language_code=self.language_code,
            diarize=False,
        )
        return (getattr(transcription, "text", "") or "").strip()


class MockSpeaker:
    """Mock speaker that prints phrases instead of playing them."""

    def __init__(self, quiet: bool = False):
        """Initialize the mock speaker."""
        self.spoken: List[str] = []
        self.cancel_count = 0
        self.quiet = quiet

    def speak(self, text: str) -> None:
        if not text:
            return
        self.spoken.append(text)
        if not self.quiet:
            print(f"[MockSpeaker] Say: {text!r} (call #{len(self.spoken)})")

    def cancel(self) -> None:
        self.cancel_count += 1

    def reset_counters(self) -> None:
        """Reset recorded phrases for testing."""
        self.spoken.clear()
        self.cancel_count = 0
