"""
Main application: sign-to-speech from the webcam.
"""
import logging
import sys
import time
from typing import Optional

import cv2

from .camera import HandsTracker, draw_landmarks, draw_stability_bar
from .config import load_config
from .quality import confidence_level, recognition_issues
from .speech import ElevenLabsSpeaker, MockSpeaker
from .storage import create_store
from .translator import SignTranslator


class SignBridgeApp:
    """Main application class for webcam sign translation."""

    def __init__(self, config_path: Optional[str] = None, use_speech: bool = True):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )

        # Choose speaker type
        speaker = MockSpeaker()
        if use_speech:
            try:
                speaker = ElevenLabsSpeaker(
                    voice_id=self.config.speech.voice_id,
                    model_id=self.config.speech.model_id,
                    output_format=self.config.speech.output_format,
                )
                print("🔊 Using Eleven Labs speech")
            except ValueError as e:
                print(f"⚠️  {e} - using mock speaker")

        self.translator = SignTranslator(
            store=create_store(self.config.storage),
            speaker=speaker,
            threshold=self.config.stability.threshold,
            auto_speak=self.config.speech.auto_speak,
        )

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    def run(self):
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        print("✋ Hold a sign steady until the bar fills to hear it spoken")
        print("Keys: 'space' add space, 'b' backspace, 's' speak sentence, 'c' clear, 'h' clear history, 'q' quit")

        self.translator.start()
        fps = 0.0
        last_frame_time = time.time()

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    print("Failed to read frame from camera")
                    break

                landmarks = self.tracker.process(frame)
                update = self.translator.process(landmarks)

                now = time.time()
                dt = now - last_frame_time
                last_frame_time = now
                if dt > 0:
                    # exponential moving average keeps the readout steady
                    fps = 0.9 * fps + 0.1 * (1.0 / dt) if fps else 1.0 / dt

                if landmarks and self.config.display.show_landmarks:
                    frame = draw_landmarks(frame, landmarks)

                if self.config.display.mirror:
                    frame = cv2.flip(frame, 1)

                self._draw_status(frame, update, fps)

                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                self._handle_key(key)
        finally:
            session = self.translator.stop()
            if session is not None:
                print(f"📊 Session ended with {session.total_gestures} gestures")
            self.tracker.close()
            self.cap.release()
            cv2.destroyAllWindows()

    def _handle_key(self, key: int) -> None:
        sentence = self.translator.sentence
        if key == ord(' '):
            sentence.add_space()
        elif key == ord('b'):
            sentence.backspace()
        elif key == ord('c'):
            sentence.clear()
        elif key == ord('s'):
            self.translator.speak_sentence()
        elif key == ord('h'):
            self.translator.clear_history()
            print("🧹 History cleared")

    def _draw_status(self, frame, update, fps: float) -> None:
        white = (255, 255, 255)
        confidence = update.result.confidence if update.result else 0.0

        if update.hand_detected:
            label = update.result.label or "?"
            level = confidence_level(confidence)
            status_text = f"Hand: {label} ({confidence:.0%}, {level})"
            color = (0, 255, 0) if update.result.label else (0, 165, 255)
        else:
            status_text = "Show your hand"
            color = (0, 0, 255)

        cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)
        cv2.putText(frame, f"FPS: {fps:.0f}", (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.5, white, 1)

        for i, issue in enumerate(recognition_issues(update.hand_detected, confidence)):
            cv2.putText(frame, issue, (10, 85 + i * 20), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 165, 255), 1)

        if update.hand_detected and update.progress > 0:
            draw_stability_bar(frame, update.progress, origin=(10, 130))

        if self.translator.last_description:
            cv2.putText(frame, self.translator.last_description, (10, 180),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, (20, 184, 166), 2)

        cv2.putText(frame, f"Sentence: {self.translator.sentence.text}", (10, frame.shape[0] - 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, white, 1)
        cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, white, 1)

    def __del__(self):
        """Cleanup resources."""
        if hasattr(self, 'cap') and self.cap.isOpened():
            self.cap.release()


def main():
    """Entry point for the application."""
    logging.basicConfig(level=logging.INFO)

    use_speech = "--no-speech" not in sys.argv
    config_path = None
    if "--config" in sys.argv:
        idx = sys.argv.index("--config")
        if idx + 1 < len(sys.argv):
            config_path = sys.argv[idx + 1]

    try:
        app = SignBridgeApp(config_path=config_path, use_speech=use_speech)
        app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
