"""
Configuration management for hand gesture recognition system.
"""
import copy
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List, Union
from dataclasses import dataclass

from dotenv import load_dotenv

CONFIG_ENV_VAR = "GESTURE_ACCESS_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


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
    model_complexity: int
    min_detection_confidence: float
    min_tracking_confidence: float


@dataclass
class GesturesConfig:
    """Gesture classification and confirmation tuning."""
    confirm_frames: int
    debounce_ms: float
    pinch_distance: float
    ok_distance: float


@dataclass
class DispatchConfig:
    """Action dispatcher settings."""
    scroll_step_px: int
    sections: List[str]
    themes: List[str]


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool
    show_palm_center: bool
    window_name: str


@dataclass
class ServerConfig:
    """HTTP/WebSocket server settings."""
    host: str
    port: int
    log_level: str


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig
    mediapipe: MediaPipeConfig
    gestures: GesturesConfig
    dispatch: DispatchConfig
    display: DisplayConfig
    server: ServerConfig


def load_config(path: Optional[Union[str, Path]] = None) -> Cfg:
    """
    Load configuration from YAML file.

    The packaged config.default.yaml is always read first; the file given by
    ``path`` (or the GESTURE_ACCESS_CONFIG environment variable) is merged
    over it, so it only needs the keys it changes.

    Args:
        path: Path to config file. If None, uses the environment variable or
            only the defaults

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: the override file does not exist
        ValueError: a setting is out of range
    """
    load_dotenv()

    data = _read_yaml(DEFAULT_CONFIG_PATH)

    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = _merge(data, _read_yaml(config_path))

    return _dict_to_config(data)


def config_from_dict(overrides: Dict[str, Any]) -> Cfg:
    """Build a configuration from the defaults plus an in-memory override dict."""
    return _dict_to_config(_merge(_read_yaml(DEFAULT_CONFIG_PATH), overrides))


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = _section(data, 'camera')
    camera = CameraConfig(
        index=int(camera_data['index']),
        width=int(camera_data['width']),
        height=int(camera_data['height']),
        fps=int(camera_data['fps'])
    )

    mp_data = _section(data, 'mediapipe')
    mediapipe = MediaPipeConfig(
        max_num_hands=int(mp_data['max_num_hands']),
        model_complexity=int(mp_data['model_complexity']),
        min_detection_confidence=float(mp_data['min_detection_confidence']),
        min_tracking_confidence=float(mp_data['min_tracking_confidence'])
    )

    gestures_data = _section(data, 'gestures')
    gestures = GesturesConfig(
        confirm_frames=int(gestures_data['confirm_frames']),
        debounce_ms=float(gestures_data['debounce_ms']),
        pinch_distance=float(gestures_data['pinch_distance']),
        ok_distance=float(gestures_data['ok_distance'])
    )

    dispatch_data = _section(data, 'dispatch')
    dispatch = DispatchConfig(
        scroll_step_px=int(dispatch_data['scroll_step_px']),
        sections=list(dispatch_data['sections'] or []),
        themes=list(dispatch_data['themes'] or [])
    )

    display_data = _section(data, 'display')
    display = DisplayConfig(
        show_landmarks=bool(display_data['show_landmarks']),
        show_palm_center=bool(display_data['show_palm_center']),
        window_name=str(display_data['window_name'])
    )

    server_data = _section(data, 'server')
    server = ServerConfig(
        host=str(server_data['host']),
        port=int(server_data['port']),
        log_level=str(server_data['log_level'])
    )

    cfg = Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        dispatch=dispatch,
        display=display,
        server=server
    )
    _validate(cfg)
    return cfg


def _validate(cfg: Cfg) -> None:
    g = cfg.gestures
    if g.confirm_frames < 1:
        raise ValueError(f"gestures.confirm_frames must be >= 1, got {g.confirm_frames}")
    if g.debounce_ms < 0:
        raise ValueError(f"gestures.debounce_ms must be >= 0, got {g.debounce_ms}")
    if g.pinch_distance <= 0 or g.ok_distance <= 0:
        raise ValueError("gestures.pinch_distance and gestures.ok_distance must be positive")
    if cfg.mediapipe.max_num_hands < 1:
        raise ValueError("mediapipe.max_num_hands must be >= 1")
    if not cfg.dispatch.sections:
        raise ValueError("dispatch.sections must not be empty")
    if not cfg.dispatch.themes:
        raise ValueError("dispatch.themes must not be empty")
