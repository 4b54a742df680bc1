"""
Project-wide constants for plainly
"""  # noqa: D200, D212, D415

from pathlib import Path

# ==============================================================================
# Backends
# ==============================================================================

DEFAULT_CLOUD_MODEL = "gemini-2.5-flash"
DEFAULT_LOCAL_BASE_URL = "http://localhost:11434"
DEFAULT_LOCAL_MODEL = "llama3.2"

# Timeouts (seconds)
DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_PROBE_TIMEOUT = 3.0

# On-device server endpoints
LOCAL_PROBE_ENDPOINT = "/api/tags"
LOCAL_GENERATE_ENDPOINT = "/api/generate"

# ==============================================================================
# Media
# ==============================================================================

VIDEO_MIME_TYPE = "video/mp4"
DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
YOUTUBE_MIME_TYPE = "video/mp4"

# ==============================================================================
# History
# ==============================================================================

HISTORY_FILE_NAME = "explanation_history.json"
DEFAULT_HISTORY_PATH = Path.home() / ".local" / "share" / "plainly" / HISTORY_FILE_NAME
TITLE_MAX_CHARS = 40

# ==============================================================================
# Offline placeholder
# ==============================================================================

PLACEHOLDER_EXCERPT_CHARS = 50
