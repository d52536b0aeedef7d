"""
Voice catalog

Sample recordings stand in for real synthesis output.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

SAMPLE_BASE_URL = "https://cloud.google.com/text-to-speech/docs/audio"

DEFAULT_VOICE_ID = "vi-VN-Standard-A"


@dataclass(frozen=True)
class Voice:
    id: str
    name: str
    language: str
    sample_url: str


VOICES: List[Voice] = [
    Voice("vi-VN-Standard-A", "Standard A (female)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Standard-A.wav"),
    Voice("vi-VN-Standard-B", "Standard B (male)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Standard-B.wav"),
    Voice("vi-VN-Standard-C", "Standard C (female)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Standard-C.wav"),
    Voice("vi-VN-Standard-D", "Standard D (male)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Standard-D.wav"),
    Voice("vi-VN-Wavenet-A", "Wavenet A (female)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Wavenet-A.wav"),
    # No dedicated news recording, reuses the Wavenet sample
    Voice("vi-VN-News-A", "News A (female)", "vi-VN", f"{SAMPLE_BASE_URL}/vi-VN-Wavenet-A.wav"),
]

_BY_ID: Dict[str, Voice] = {voice.id: voice for voice in VOICES}

# Short ids used by early clients
ALIASES: Dict[str, str] = {"v1": DEFAULT_VOICE_ID}


def find_voice(voice_id: str) -> Optional[Voice]:
    if not voice_id:
        return None
    return _BY_ID.get(ALIASES.get(voice_id, voice_id))


def list_voices() -> List[Voice]:
    return list(VOICES)
