"""
Persistence for translation sessions, confirmed gestures and speech transcripts.

Two backends share one interface (GestureStoreProto):
- InMemoryStore keeps everything in dicts, for local runs and tests
- RestStore talks to a hosted PostgREST / Supabase database over HTTP
"""
import logging
import os
import uuid
from dataclasses import asdict, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests

from .types import GestureLog, GestureSession, GestureStoreProto, SpeechTranscript

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "gesture_sessions"
LOGS_TABLE = "gesture_logs"
TRANSCRIPTS_TABLE = "speech_transcripts"


class StorageError(RuntimeError):
    """Raised when the persistence backend rejects or fails a request."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_session_name() -> str:
    return f"Session {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"


def _round_confidence(confidence: float) -> float:
    return round(float(confidence), 2)


def _from_row(cls, row: Dict[str, Any]):
    """Build a record from a database row, ignoring columns the record does not carry."""
    names = {f.name for f in fields(cls)}
    return cls(**{key: value for key, value in row.items() if key in names})


class InMemoryStore:
    """Dict-backed store. Ids are uuid4 strings, timestamps ISO-8601 UTC."""

    def __init__(self):
        self.sessions: Dict[str, GestureSession] = {}
        self.logs: Dict[str, GestureLog] = {}
        self.transcripts: Dict[str, SpeechTranscript] = {}

    def start_session(self, session_name: Optional[str] = None) -> GestureSession:
        session = GestureSession(
            id=str(uuid.uuid4()),
            session_name=session_name or default_session_name(),
            started_at=_now(),
        )
        self.sessions[session.id] = session
        return session

    def end_session(self, session_id: str, total_gestures: int) -> GestureSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise StorageError(f"Unknown session: {session_id}")
        session.ended_at = _now()
        session.total_gestures = total_gestures
        return session

    def log_gesture(self, session_id: str, gesture_name: str,
                    gesture_description: str, confidence: float) -> GestureLog:
        if session_id not in self.sessions:
            raise StorageError(f"Unknown session: {session_id}")
        log = GestureLog(
            id=str(uuid.uuid4()),
            session_id=session_id,
            gesture_name=gesture_name,
            gesture_description=gesture_description,
            confidence=_round_confidence(confidence),
            detected_at=_now(),
        )
        self.logs[log.id] = log
        return log

    def save_transcript(self, session_id: Optional[str], original_text: str,
                        converted_signs: List[str]) -> SpeechTranscript:
        transcript = SpeechTranscript(
            id=str(uuid.uuid4()),
            session_id=session_id,
            original_text=original_text,
            converted_signs=list(converted_signs),
            created_at=_now(),
        )
        self.transcripts[transcript.id] = transcript
        return transcript

    def get_session(self, session_id: str) -> Optional[GestureSession]:
        return self.sessions.get(session_id)

    def recent_sessions(self, limit: int = 10) -> List[GestureSession]:
        # dicts keep insertion order; newest last
        return list(reversed(list(self.sessions.values())))[:limit]

    def recent_logs(self, session_id: Optional[str] = None, limit: int = 100) -> List[GestureLog]:
        logs = [log for log in self.logs.values() if session_id is None or log.session_id == session_id]
        return list(reversed(logs))[:limit]

    def recent_transcripts(self, limit: int = 50) -> List[SpeechTranscript]:
        return list(reversed(list(self.transcripts.values())))[:limit]


class RestStore:
    """
    Store backed by a PostgREST endpoint (the REST layer Supabase exposes).

    Args:
        base_url: Project URL, e.g. https://xyz.supabase.co
        api_key: Anon or service key, sent as apikey and bearer token
        timeout: Per-request timeout in seconds
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        if not base_url:
            raise ValueError("base_url is required for RestStore")
        if not api_key:
            raise ValueError("api_key is required for RestStore")
        self.rest_url = base_url.rstrip("/") + "/rest/v1"
        self.timeout = timeout
        self.http = session or requests.Session()
        self.http.headers.update({
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        })

    def _request(self, method: str, table: str, *, params: Optional[Dict[str, str]] = None,
                 json: Optional[Dict[str, Any]] = None, returning: bool = False) -> List[Dict[str, Any]]:
        headers = {"Prefer": "return=representation"} if returning else {}
        url = f"{self.rest_url}/{table}"
        try:
            response = self.http.request(method, url, params=params, json=json,
                                         headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"{method} {table} failed: {e}") from e

        if not response.content:
            return []
        return response.json()

    def _single(self, rows: List[Dict[str, Any]], table: str) -> Dict[str, Any]:
        if not rows:
            raise StorageError(f"{table}: no row returned")
        return rows[0]

    def start_session(self, session_name: Optional[str] = None) -> GestureSession:
        rows = self._request("POST", SESSIONS_TABLE, returning=True,
                             json={"session_name": session_name or default_session_name()})
        return _from_row(GestureSession, self._single(rows, SESSIONS_TABLE))

    def end_session(self, session_id: str, total_gestures: int) -> GestureSession:
        rows = self._request("PATCH", SESSIONS_TABLE, returning=True,
                             params={"id": f"eq.{session_id}"},
                             json={"ended_at": _now(), "total_gestures": total_gestures})
        return _from_row(GestureSession, self._single(rows, SESSIONS_TABLE))

    def log_gesture(self, session_id: str, gesture_name: str,
                    gesture_description: str, confidence: float) -> GestureLog:
        rows = self._request("POST", LOGS_TABLE, returning=True, json={
            "session_id": session_id,
            "gesture_name": gesture_name,
            "gesture_description": gesture_description,
            "confidence": _round_confidence(confidence),
        })
        return _from_row(GestureLog, self._single(rows, LOGS_TABLE))

    def save_transcript(self, session_id: Optional[str], original_text: str,
                        converted_signs: List[str]) -> SpeechTranscript:
        rows = self._request("POST", TRANSCRIPTS_TABLE, returning=True, json={
            "session_id": session_id,
            "original_text": original_text,
            "converted_signs": list(converted_signs),
        })
        row = self._single(rows, TRANSCRIPTS_TABLE)
        row["converted_signs"] = row.get("converted_signs") or []
        return _from_row(SpeechTranscript, row)

    def get_session(self, session_id: str) -> Optional[GestureSession]:
        rows = self._request("GET", SESSIONS_TABLE, params={"select": "*", "id": f"eq.{session_id}"})
        return _from_row(GestureSession, rows[0]) if rows else None

    def recent_sessions(self, limit: int = 10) -> List[GestureSession]:
        rows = self._request("GET", SESSIONS_TABLE, params={
            "select": "*", "order": "started_at.desc", "limit": str(limit),
        })
        return [_from_row(GestureSession, row) for row in rows]

    def recent_logs(self, session_id: Optional[str] = None, limit: int = 100) -> List[GestureLog]:
        params = {"select": "*", "order": "detected_at.desc", "limit": str(limit)}
        if session_id is not None:
            params["session_id"] = f"eq.{session_id}"
        rows = self._request("GET", LOGS_TABLE, params=params)
        return [_from_row(GestureLog, row) for row in rows]

    def recent_transcripts(self, limit: int = 50) -> List[SpeechTranscript]:
        rows = self._request("GET", TRANSCRIPTS_TABLE, params={
            "select": "*", "order": "created_at.desc", "limit": str(limit),
        })
        transcripts = []
        for row in rows:
            row["converted_signs"] = row.get("converted_signs") or []
            transcripts.append(_from_row(SpeechTranscript, row))
        return transcripts


def dashboard_stats(store: GestureStoreProto, sessions_limit: int = 50,
                    logs_limit: int = 100, transcripts_limit: int = 50) -> Dict[str, Any]:
    """Headline numbers for the dashboard, over the most recent rows."""
    sessions = store.recent_sessions(limit=sessions_limit)
    logs = store.recent_logs(limit=logs_limit)
    transcripts = store.recent_transcripts(limit=transcripts_limit)

    confidences = [log.confidence or 0.0 for log in logs]
    avg_confidence = sum(confidences) / len(confidences) if confidences else 0.0

    gesture_counts: Dict[str, int] = {}
    for log in logs:
        gesture_counts[log.gesture_name] = gesture_counts.get(log.gesture_name, 0) + 1

    return {
        "recent_sessions": len(sessions),
        "gestures_logged": len(logs),
        "transcripts": len(transcripts),
        "avg_confidence": round(avg_confidence, 4),
        "avg_confidence_pct": round(avg_confidence * 100),
        "gesture_counts": gesture_counts,
    }


def record_to_dict(record) -> Dict[str, Any]:
    return asdict(record)


def create_store(storage_cfg) -> GestureStoreProto:
    """
    Build the store named in the storage section of the config.

    The REST key is read from the environment variable named by key_env.
    """
    if storage_cfg.backend == "rest":
        api_key = os.getenv(storage_cfg.key_env, "")
        logger.info(f"Using REST store at {storage_cfg.url}")
        return RestStore(storage_cfg.url, api_key)
    return InMemoryStore()
