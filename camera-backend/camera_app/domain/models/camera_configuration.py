# Standard library imports
import json
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, List

# Local application imports
from ..constants import CameraConfigurationFields as F

logger = logging.getLogger(__name__)


# Operational bounds (inclusive)
FRAME_RATE_RANGE = (1, 60)
QUALITY_RANGE = (0, 100)
MAX_CONNECTIONS_RANGE = (1, 50)
CONNECTION_TIMEOUT_RANGE = (5, 300)
RETRY_INTERVAL_RANGE = (5, 300)
MAX_RETRY_ATTEMPTS_RANGE = (1, 20)
SENSITIVITY_RANGE = (0, 100)
RECORDING_DURATION_RANGE = (0, 1440)
FACIAL_THRESHOLD_RANGE = (0, 100)


def _in_range(value: Optional[int], bounds: tuple) -> bool:
    return value is not None and bounds[0] <= value <= bounds[1]


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {type(value).__name__}")
    if isinstance(value, float) and not value.is_integer():
        raise TypeError(f"Expected a whole number, got {value}")
    return int(value)


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"Expected a boolean, got {type(value).__name__}")
    return value


@dataclass
class CameraConfiguration:
    """
    Value object describing how a camera is operated.

    Stored on the camera as a camelCase JSON blob. Field defaults are the
    "empty" configuration used when decoding a partial blob; use
    CameraConfiguration.default() for the full default template.
    """
    resolution_width: Optional[int] = None
    resolution_height: Optional[int] = None
    frame_rate: Optional[int] = None
    quality: Optional[int] = None
    auto_start: bool = False
    max_connections: int = 5
    connection_timeout_seconds: int = 30
    retry_interval_seconds: int = 60
    max_retry_attempts: int = 3
    enable_motion_detection: bool = False
    motion_sensitivity: Optional[int] = None
    enable_recording: bool = False
    recording_duration_minutes: Optional[int] = None
    enable_facial_recognition: bool = True
    facial_recognition_threshold: Optional[int] = 80
    extended_configuration: Optional[Dict[str, Any]] = None

    @classmethod
    def default(cls) -> "CameraConfiguration":
        """Default template applied to newly created cameras"""
        return cls(
            resolution_width=1920,
            resolution_height=1080,
            frame_rate=30,
            quality=75,
            auto_start=False,
            max_connections=5,
            connection_timeout_seconds=30,
            retry_interval_seconds=60,
            max_retry_attempts=3,
            enable_motion_detection=False,
            enable_recording=False,
            enable_facial_recognition=True,
            facial_recognition_threshold=80,
        )

    def get_resolution_string(self) -> str:
        """Resolution as "WIDTHxHEIGHT", or "Auto" when not fully specified"""
        if self.resolution_width is not None and self.resolution_height is not None:
            return f"{self.resolution_width}x{self.resolution_height}"
        return "Auto"

    def validate(self) -> List[str]:
        """
        Validate the configuration against its operational bounds

        Returns:
            List of human-readable violations (empty when valid)
        """
        errors: List[str] = []

        if self.resolution_width is not None and self.resolution_width <= 0:
            errors.append("Resolution width must be greater than 0")

        if self.resolution_height is not None and self.resolution_height <= 0:
            errors.append("Resolution height must be greater than 0")

        if self.frame_rate is not None and not _in_range(self.frame_rate, FRAME_RATE_RANGE):
            errors.append("Frame rate must be between 1 and 60 FPS")

        if self.quality is not None and not _in_range(self.quality, QUALITY_RANGE):
            errors.append("Quality must be between 0 and 100")

        if not _in_range(self.max_connections, MAX_CONNECTIONS_RANGE):
            errors.append("Max connections must be between 1 and 50")

        if not _in_range(self.connection_timeout_seconds, CONNECTION_TIMEOUT_RANGE):
            errors.append("Connection timeout must be between 5 and 300 seconds")

        if not _in_range(self.retry_interval_seconds, RETRY_INTERVAL_RANGE):
            errors.append("Retry interval must be between 5 and 300 seconds")

        if not _in_range(self.max_retry_attempts, MAX_RETRY_ATTEMPTS_RANGE):
            errors.append("Max retry attempts must be between 1 and 20")

        if self.enable_motion_detection:
            if not _in_range(self.motion_sensitivity, SENSITIVITY_RANGE):
                errors.append(
                    "Motion sensitivity must be between 0 and 100 when motion detection is enabled"
                )
        elif self.motion_sensitivity is not None and not _in_range(self.motion_sensitivity, SENSITIVITY_RANGE):
            errors.append("Motion sensitivity must be between 0 and 100")

        if self.recording_duration_minutes is not None and not _in_range(
            self.recording_duration_minutes, RECORDING_DURATION_RANGE
        ):
            errors.append("Recording duration must be between 0 and 1440 minutes")

        if self.enable_facial_recognition:
            if not _in_range(self.facial_recognition_threshold, FACIAL_THRESHOLD_RANGE):
                errors.append(
                    "Facial recognition threshold must be between 0 and 100 when facial recognition is enabled"
                )
        elif self.facial_recognition_threshold is not None and not _in_range(
            self.facial_recognition_threshold, FACIAL_THRESHOLD_RANGE
        ):
            errors.append("Facial recognition threshold must be between 0 and 100")

        return errors

    def is_valid(self) -> bool:
        return not self.validate()

    def to_dict(self) -> Dict[str, Any]:
        """camelCase mapping used for persistence"""
        return {
            F.RESOLUTION_WIDTH: self.resolution_width,
            F.RESOLUTION_HEIGHT: self.resolution_height,
            F.FRAME_RATE: self.frame_rate,
            F.QUALITY: self.quality,
            F.AUTO_START: self.auto_start,
            F.MAX_CONNECTIONS: self.max_connections,
            F.CONNECTION_TIMEOUT_SECONDS: self.connection_timeout_seconds,
            F.RETRY_INTERVAL_SECONDS: self.retry_interval_seconds,
            F.MAX_RETRY_ATTEMPTS: self.max_retry_attempts,
            F.ENABLE_MOTION_DETECTION: self.enable_motion_detection,
            F.MOTION_SENSITIVITY: self.motion_sensitivity,
            F.ENABLE_RECORDING: self.enable_recording,
            F.RECORDING_DURATION_MINUTES: self.recording_duration_minutes,
            F.ENABLE_FACIAL_RECOGNITION: self.enable_facial_recognition,
            F.FACIAL_RECOGNITION_THRESHOLD: self.facial_recognition_threshold,
            F.EXTENDED_CONFIGURATION: self.extended_configuration,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CameraConfiguration":
        """
        Build a configuration from a camelCase mapping.

        Keys are matched case-insensitively and unknown keys are ignored.

        Raises:
            TypeError: If a known key carries a value of the wrong type
        """
        lookup = {str(key).lower(): value for key, value in data.items()}
        configuration = cls()

        def present(key: str) -> bool:
            return key.lower() in lookup

        def value_of(key: str) -> Any:
            return lookup[key.lower()]

        optional_ints = {
            F.RESOLUTION_WIDTH: "resolution_width",
            F.RESOLUTION_HEIGHT: "resolution_height",
            F.FRAME_RATE: "frame_rate",
            F.QUALITY: "quality",
            F.MOTION_SENSITIVITY: "motion_sensitivity",
            F.RECORDING_DURATION_MINUTES: "recording_duration_minutes",
            F.FACIAL_RECOGNITION_THRESHOLD: "facial_recognition_threshold",
        }
        required_ints = {
            F.MAX_CONNECTIONS: "max_connections",
            F.CONNECTION_TIMEOUT_SECONDS: "connection_timeout_seconds",
            F.RETRY_INTERVAL_SECONDS: "retry_interval_seconds",
            F.MAX_RETRY_ATTEMPTS: "max_retry_attempts",
        }
        flags = {
            F.AUTO_START: "auto_start",
            F.ENABLE_MOTION_DETECTION: "enable_motion_detection",
            F.ENABLE_RECORDING: "enable_recording",
            F.ENABLE_FACIAL_RECOGNITION: "enable_facial_recognition",
        }

        for key, attribute in optional_ints.items():
            if present(key):
                setattr(configuration, attribute, _as_optional_int(value_of(key)))

        for key, attribute in required_ints.items():
            if present(key):
                number = _as_optional_int(value_of(key))
                if number is None:
                    raise TypeError(f"'{key}' cannot be null")
                setattr(configuration, attribute, number)

        for key, attribute in flags.items():
            if present(key):
                setattr(configuration, attribute, _as_bool(value_of(key)))

        if present(F.EXTENDED_CONFIGURATION):
            extended = value_of(F.EXTENDED_CONFIGURATION)
            if extended is not None and not isinstance(extended, dict):
                raise TypeError("'extendedConfiguration' must be an object")
            configuration.extended_configuration = extended

        return configuration

    @classmethod
    def from_json(cls, raw: Optional[str]) -> Optional["CameraConfiguration"]:
        """
        Decode a persisted configuration blob.

        Returns:
            CameraConfiguration, or None if the blob is empty or cannot be
            decoded (callers treat None as "use defaults")
        """
        if not raw:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                return None
            return cls.from_dict(data)
        except (ValueError, TypeError) as e:
            logger.debug(f"Ignoring undecodable camera configuration: {e}")
            return None
