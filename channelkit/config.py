import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# API Keys - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

# Text backend for Description/About/Thumbnail theme: "gemini" or "openai"
TEXT_PROVIDER = os.getenv("CHANNELKIT_TEXT_PROVIDER", "gemini")

# Model names
GEMINI_TEXT_MODEL = os.getenv("CHANNELKIT_TEXT_MODEL", "gemini-2.5-flash")
IMAGEN_MODEL = os.getenv("CHANNELKIT_IMAGEN_MODEL", "imagen-4.0-generate-001")
GEMINI_IMAGE_MODEL = os.getenv("CHANNELKIT_IMAGE_MODEL", "gemini-2.5-flash-image")
VEO_MODEL = os.getenv("CHANNELKIT_VIDEO_MODEL", "veo-3.1-fast-generate-preview")
OPENAI_MODEL = os.getenv("CHANNELKIT_OPENAI_MODEL", "gpt-5.2")

# Local storage
OUTPUT_DIR = Path(os.getenv("CHANNELKIT_OUTPUT_DIR", "output"))
HISTORY_PATH = Path(os.getenv("CHANNELKIT_HISTORY_PATH", str(OUTPUT_DIR / "history.json")))
HISTORY_KEY = "channelkit.history"
HISTORY_LIMIT = int(os.getenv("CHANNELKIT_HISTORY_LIMIT", "50"))

# Video polling
POLL_INTERVAL = float(os.getenv("CHANNELKIT_POLL_INTERVAL", "10"))
MAX_WAIT = float(os.getenv("CHANNELKIT_MAX_WAIT", "600"))
MAX_POLL_ATTEMPTS = int(os.getenv("CHANNELKIT_MAX_POLL_ATTEMPTS", "0")) or None  # 0 = wall clock only

# Request timeout for artifact downloads (seconds)
DOWNLOAD_TIMEOUT = 120


@dataclass(frozen=True)
class AssetSize:
    width: int
    height: int
    aspect_ratio: str  # "1:1" or "16:9"

    @property
    def dimensions(self) -> str:
        return f"{self.width}x{self.height}"


YOUTUBE_LOGO_SIZE = AssetSize(800, 800, "1:1")
# Banners are 2560x1440, but 16:9 is what the generator accepts
YOUTUBE_BANNER_SIZE = AssetSize(2560, 1440, "16:9")
YOUTUBE_BANNER_SAFE_AREA = AssetSize(1546, 423, "16:9")
YOUTUBE_THUMBNAIL_SIZE = AssetSize(1280, 720, "16:9")
YOUTUBE_INTRO_SIZE = AssetSize(1280, 720, "16:9")  # 720p

DEFAULT_LANGUAGE = "English"
DEFAULT_TONE = "Friendly"
