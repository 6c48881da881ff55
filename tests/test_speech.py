"""
Test cases for the speech layer with a mocked Eleven Labs client.
"""
import threading
import time
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from signbridge.speech import ElevenLabsSpeaker, ElevenLabsTranscriber, MockSpeaker
from signbridge.types import SpeakerProto


class TestMockSpeaker(unittest.TestCase):

    def test_records_phrases(self):
        speaker = MockSpeaker(quiet=True)
        speaker.speak("Peace! Victory!")
        speaker.speak("")
        speaker.cancel()
        self.assertEqual(speaker.spoken, ["Peace! Victory!"])
        self.assertEqual(speaker.cancel_count, 1)
        self.assertIsInstance(speaker, SpeakerProto)

        speaker.reset_counters()
        self.assertEqual(speaker.spoken, [])
        self.assertEqual(speaker.cancel_count, 0)


class TestElevenLabsSpeaker(unittest.TestCase):

    def setUp(self):
        self.client = mock.Mock()
        self.client.text_to_speech.convert.return_value = iter([b"abc", b"def"])
        self.speaker = ElevenLabsSpeaker(client=self.client, background=False)

    @mock.patch("signbridge.speech.play")
    def test_speak_synthesizes_and_plays(self, mock_play):
        self.speaker.speak("I love you!")

        self.client.text_to_speech.convert.assert_called_once_with(
            text="I love you!",
            voice_id="JBFqnCBsd6RMkjVDRZzb",
            model_id="eleven_turbo_v2_5",
            output_format="mp3_22050_32",
        )
        mock_play.assert_called_once_with(b"abcdef")

    @mock.patch("signbridge.speech.play")
    def test_blank_text_is_ignored(self, mock_play):
        self.speaker.speak("   ")
        self.client.text_to_speech.convert.assert_not_called()
        mock_play.assert_not_called()

    @mock.patch("signbridge.speech.play")
    def test_synthesis_failure_is_logged(self, mock_play):
        self.client.text_to_speech.convert.side_effect = RuntimeError("quota exceeded")
        with self.assertLogs("signbridge.speech", level="ERROR"):
            self.speaker.speak("Rock on!")
        mock_play.assert_not_called()

    @mock.patch("signbridge.speech.play")
    def test_cancelled_phrase_is_not_played(self, mock_play):
        speaker = self.speaker

        def convert(**kwargs):
            speaker.cancel()
            return iter([b"x"])

        self.client.text_to_speech.convert.side_effect = convert
        speaker.speak("Yes, that's correct!")
        mock_play.assert_not_called()

    def test_background_phrases_never_overlap(self):
        """A second phrase waits for the first one to finish playing."""
        self.client.text_to_speech.convert.side_effect = lambda **kwargs: iter([kwargs["text"].encode()])
        speaker = ElevenLabsSpeaker(client=self.client, background=True)

        counter_lock = threading.Lock()
        finished = threading.Event()
        played = []
        playing = [0]
        peak = [0]

        def slow_play(audio):
            with counter_lock:
                playing[0] += 1
                peak[0] = max(peak[0], playing[0])
            time.sleep(0.3)
            with counter_lock:
                playing[0] -= 1
                played.append(audio)
                if len(played) == 2:
                    finished.set()

        with mock.patch("signbridge.speech.play", side_effect=slow_play):
            speaker.speak("first")
            time.sleep(0.05)
            speaker.speak("second")
            self.assertTrue(finished.wait(timeout=5))

        self.assertEqual(peak[0], 1)
        self.assertEqual(played, [b"first", b"second"])

    def test_missing_api_key(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError):
                ElevenLabsSpeaker()


class TestElevenLabsTranscriber(unittest.TestCase):

    def test_transcribe(self):
        client = mock.Mock()
        client.speech_to_text.convert.return_value = SimpleNamespace(text="  hello there \n")
        transcriber = ElevenLabsTranscriber(client=client)

        self.assertEqual(transcriber.transcribe(b"RIFF...."), "hello there")
        kwargs = client.speech_to_text.convert.call_args.kwargs
        self.assertEqual(kwargs["model_id"], "scribe_v1")
        self.assertEqual(kwargs["file"], b"RIFF....")


if __name__ == '__main__':
    unittest.main()
