"""
Configuration management for the sign language translator.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int
    width: int
    height: int
    fps: int


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class StabilityConfig:
    """How many consecutive frames confirm a sign."""
    threshold: int


@dataclass
class SpeechConfig:
    """Text-to-speech settings."""
    auto_speak: bool
    voice_id: str
    model_id: str
    output_format: str


@dataclass
class StorageConfig:
    """Where sessions and gesture logs are kept."""
    backend: str  # "memory" or "rest"
    url: str
    key_env: str


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    mirror: bool
    window_name: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    stability: StabilityConfig
    speech: SpeechConfig
    storage: StorageConfig
    display: DisplayConfig


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data['camera']
    camera = CameraConfig(
        index=camera_data['index'],
        width=camera_data['width'],
        height=camera_data['height'],
        fps=camera_data['fps']
    )

    mp_data = data['mediapipe']
    mediapipe = MediaPipeConfig(
        max_num_hands=mp_data['max_num_hands'],
        min_detection_confidence=mp_data['min_detection_confidence'],
        min_tracking_confidence=mp_data['min_tracking_confidence']
    )

    stability = StabilityConfig(threshold=int(data['stability']['threshold']))
    if stability.threshold < 1:
        raise ValueError(f"stability.threshold must be at least 1, got {stability.threshold}")

    speech_data = data['speech']
    speech = SpeechConfig(
        auto_speak=speech_data['auto_speak'],
        voice_id=speech_data['voice_id'],
        model_id=speech_data['model_id'],
        output_format=speech_data['output_format']
    )

    storage_data = data['storage']
    storage = StorageConfig(
        backend=storage_data['backend'],
        url=storage_data.get('url', ''),
        key_env=storage_data.get('key_env', 'SUPABASE_KEY')
    )
    if storage.backend not in ("memory", "rest"):
        raise ValueError(f"storage.backend must be 'memory' or 'rest', got {storage.backend!r}")

    display_data = data['display']
    display = DisplayConfig(
        show_landmarks=display_data['show_landmarks'],
        mirror=display_data['mirror'],
        window_name=display_data['window_name']
    )

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        stability=stability,
        speech=speech,
        storage=storage,
        display=display
    )
