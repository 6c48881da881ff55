#!/usr/bin/env python3
"""
SignBridge - FastAPI Server
Classifies hand landmarks sent by a browser client, streams stability
feedback over a WebSocket and exposes session history for the dashboard.
"""

import base64
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .classifier import classify
from .config import Cfg, load_config
from .phrases import ASL_ALPHABET, describe, text_to_signs
from .speech import ElevenLabsSpeaker, ElevenLabsTranscriber
from .storage import StorageError, create_store, dashboard_stats, record_to_dict
from .translator import SignTranslator
from .types import GestureStoreProto, SpeakerProto

logger = logging.getLogger(__name__)


# Request/Response models
class ClassifyRequest(BaseModel):
    landmarks: Optional[List[List[float]]] = None


class ClassifyResponse(BaseModel):
    hand_detected: bool
    label: Optional[str] = None
    confidence: float = 0.0
    description: Optional[str] = None
    finger_states: Optional[Dict[str, bool]] = None
    extended_fingers: int = 0


class StartSessionRequest(BaseModel):
    session_name: Optional[str] = None


class EndSessionRequest(BaseModel):
    total_gestures: int = Field(0, ge=0)


class LogGestureRequest(BaseModel):
    session_id: str
    gesture_name: str
    gesture_description: Optional[str] = None
    confidence: float = Field(..., ge=0.0, le=1.0)


class SpeechToSignRequest(BaseModel):
    text: str
    session_id: Optional[str] = None


class AudioToSignRequest(BaseModel):
    audio_base64: str  # raw base64 or a data: URL
    session_id: Optional[str] = None


def _speaker_from_config(cfg: Cfg) -> Optional[SpeakerProto]:
    try:
        return ElevenLabsSpeaker(
            voice_id=cfg.speech.voice_id,
            model_id=cfg.speech.model_id,
            output_format=cfg.speech.output_format,
        )
    except ValueError as e:
        logger.warning(f"{e}. Server-side speech is disabled.")
        return None


def _transcriber_from_env() -> Optional[ElevenLabsTranscriber]:
    try:
        return ElevenLabsTranscriber()
    except ValueError as e:
        logger.warning(f"{e}. Audio speech-to-sign is disabled.")
        return None


def create_app(cfg: Optional[Cfg] = None,
               store: Optional[GestureStoreProto] = None,
               speaker: Optional[SpeakerProto] = None,
               transcriber: Optional[ElevenLabsTranscriber] = None,
               enable_speech: bool = False) -> FastAPI:
    """
    Build the API.

    Args:
        cfg: Configuration, loaded from config.default.yaml when None
        store: Persistence backend, built from cfg.storage when None
        speaker: Speaker used for server-side speech; browser clients speak
            the returned descriptions themselves, so this is off by default
        transcriber: Speech-to-text used by /speech-to-sign/audio
        enable_speech: Create Eleven Labs speaker and transcriber when none are given
    """
    cfg = cfg or load_config()
    store = store if store is not None else create_store(cfg.storage)
    if speaker is None and enable_speech:
        speaker = _speaker_from_config(cfg)
    if transcriber is None and enable_speech:
        transcriber = _transcriber_from_env()

    app = FastAPI(title="SignBridge API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.cfg = cfg
    app.state.store = store
    app.state.speaker = speaker
    app.state.transcriber = transcriber

    @app.get("/")
    async def root():
        return {
            "service": "SignBridge API",
            "status": "running",
            "stability_threshold": cfg.stability.threshold,
            "storage_backend": cfg.storage.backend,
            "speech_configured": speaker is not None,
            "transcription_configured": transcriber is not None,
            "timestamp": datetime.now().isoformat(),
        }

    @app.post("/classify", response_model=ClassifyResponse)
    async def classify_landmarks(request: ClassifyRequest):
        result = classify(request.landmarks)
        if result is None:
            return ClassifyResponse(hand_detected=False)
        return ClassifyResponse(
            hand_detected=True,
            label=result.label,
            confidence=result.confidence,
            description=describe(result.label) or None,
            finger_states=record_to_dict(result.finger_states),
            extended_fingers=result.finger_states.extended_count(),
        )

    @app.get("/alphabet")
    async def alphabet():
        return {
            letter: {"description": sign.description, "finger_positions": sign.finger_positions()}
            for letter, sign in ASL_ALPHABET.items()
        }

    @app.post("/sessions")
    async def start_session(request: StartSessionRequest):
        try:
            session = store.start_session(request.session_name)
        except StorageError as e:
            logger.error(f"❌ Error starting session: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        return record_to_dict(session)

    @app.post("/sessions/{session_id}/end")
    async def end_session(session_id: str, request: EndSessionRequest):
        try:
            if store.get_session(session_id) is None:
                raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
            session = store.end_session(session_id, request.total_gestures)
        except StorageError as e:
            logger.error(f"❌ Error ending session: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        return record_to_dict(session)

    @app.get("/sessions")
    async def list_sessions(limit: int = 10):
        try:
            return [record_to_dict(s) for s in store.recent_sessions(limit=limit)]
        except StorageError as e:
            raise HTTPException(status_code=502, detail=str(e))

    @app.post("/logs")
    async def log_gesture(request: LogGestureRequest):
        try:
            if store.get_session(request.session_id) is None:
                raise HTTPException(status_code=404, detail=f"Session {request.session_id} not found")
            log = store.log_gesture(
                request.session_id,
                request.gesture_name,
                request.gesture_description or describe(request.gesture_name),
                request.confidence,
            )
        except StorageError as e:
            logger.error(f"❌ Error logging gesture: {e}")
            raise HTTPException(status_code=502, detail=str(e))
        return record_to_dict(log)

    @app.get("/logs")
    async def list_logs(session_id: Optional[str] = None, limit: int = 100):
        try:
            return [record_to_dict(log) for log in store.recent_logs(session_id=session_id, limit=limit)]
        except StorageError as e:
            raise HTTPException(status_code=502, detail=str(e))

    @app.get("/transcripts")
    async def list_transcripts(limit: int = 50):
        try:
            return [record_to_dict(t) for t in store.recent_transcripts(limit=limit)]
        except StorageError as e:
            raise HTTPException(status_code=502, detail=str(e))

    def _text_to_sign_response(text: str, session_id: Optional[str]) -> Dict[str, Any]:
        letters = text_to_signs(text)
        if text.strip():
            try:
                store.save_transcript(session_id, text, letters)
            except StorageError as e:
                logger.error(f"❌ Error saving transcript: {e}")
        return {
            "text": text,
            "letters": letters,
            "signs": [
                {"letter": letter, "description": ASL_ALPHABET[letter].description}
                for letter in letters
            ],
        }

    @app.post("/speech-to-sign")
    async def speech_to_sign(request: SpeechToSignRequest):
        return _text_to_sign_response(request.text, request.session_id)

    @app.post("/speech-to-sign/audio")
    async def audio_to_sign(request: AudioToSignRequest):
        if transcriber is None:
            raise HTTPException(status_code=503, detail="Speech-to-text is not configured")

        audio_data = request.audio_base64
        try:
            audio_bytes = base64.b64decode(audio_data.split(',')[1] if ',' in audio_data else audio_data,
                                           validate=True)
        except ValueError:
            raise HTTPException(status_code=400, detail="audio_base64 is not valid base64")
        if not audio_bytes:
            raise HTTPException(status_code=400, detail="Empty audio")

        try:
            text = transcriber.transcribe(audio_bytes)
        except Exception as e:
            logger.error(f"❌ Transcription failed: {e}")
            raise HTTPException(status_code=502, detail=f"Transcription failed: {e}")

        logger.info(f"🎤 Transcribed {len(audio_bytes)} bytes: {text!r}")
        return _text_to_sign_response(text, request.session_id)

    @app.get("/stats")
    async def stats():
        try:
            return dashboard_stats(store)
        except StorageError as e:
            raise HTTPException(status_code=502, detail=str(e))

    @app.websocket("/ws")
    async def frames(websocket: WebSocket):
        """
        Per-connection translation session.

        Client messages:
            {"type": "frame", "landmarks": [[x, y, z], ...]}  (empty list = no hand)
            {"type": "reset"}
        Each frame gets a reply with the classification and stability progress.
        """
        await websocket.accept()
        session_name = websocket.query_params.get("session_name")
        translator = SignTranslator(
            store=store,
            speaker=speaker,
            threshold=cfg.stability.threshold,
            auto_speak=cfg.speech.auto_speak,
        )
        session = translator.start(session_name)
        await websocket.send_json({
            "type": "session",
            "session": record_to_dict(session) if session else None,
        })

        try:
            while True:
                try:
                    message = await websocket.receive_json()
                except ValueError:
                    await websocket.send_json({"type": "error", "error": "Message is not valid JSON"})
                    continue

                if not isinstance(message, dict):
                    await websocket.send_json({"type": "error", "error": "Message must be a JSON object"})
                    continue

                kind = message.get("type", "frame")

                if kind == "reset":
                    translator.tracker.reset()
                    await websocket.send_json({"type": "reset"})
                    continue

                if kind != "frame":
                    await websocket.send_json({"type": "error", "error": f"Unknown message type: {kind}"})
                    continue

                update = translator.process(message.get("landmarks"))
                await websocket.send_json({"type": "frame", **update.to_dict()})
        except WebSocketDisconnect:
            logger.info("WebSocket client disconnected")
        finally:
            translator.stop()

    return app


def main():
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    logger.info("🚀 Starting SignBridge server...")
    uvicorn.run(create_app(enable_speech=True), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
