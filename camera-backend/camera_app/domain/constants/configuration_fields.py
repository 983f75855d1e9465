"""Serialized (camelCase) key names for CameraConfiguration JSON"""


class CameraConfigurationFields:
    """JSON key constants for the persisted camera configuration blob"""
    RESOLUTION_WIDTH = "resolutionWidth"
    RESOLUTION_HEIGHT = "resolutionHeight"
    FRAME_RATE = "frameRate"
    QUALITY = "quality"
    AUTO_START = "autoStart"
    MAX_CONNECTIONS = "maxConnections"
    CONNECTION_TIMEOUT_SECONDS = "connectionTimeoutSeconds"
    RETRY_INTERVAL_SECONDS = "retryIntervalSeconds"
    MAX_RETRY_ATTEMPTS = "maxRetryAttempts"
    ENABLE_MOTION_DETECTION = "enableMotionDetection"
    MOTION_SENSITIVITY = "motionSensitivity"
    ENABLE_RECORDING = "enableRecording"
    RECORDING_DURATION_MINUTES = "recordingDurationMinutes"
    ENABLE_FACIAL_RECOGNITION = "enableFacialRecognition"
    FACIAL_RECOGNITION_THRESHOLD = "facialRecognitionThreshold"
    EXTENDED_CONFIGURATION = "extendedConfiguration"
