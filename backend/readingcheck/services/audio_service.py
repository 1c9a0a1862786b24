import logging

from pydub import AudioSegment

logger = logging.getLogger(__name__)


def read_audio_duration(audio_path: str) -> float:
    """Length of an audio file in seconds."""
    try:
        audio = AudioSegment.from_file(audio_path)
    except Exception as e:
        logger.error(f"Could not load audio file {audio_path} with pydub: {e}")
        raise ValueError(f"Unreadable audio file: {audio_path}") from e
    return len(audio) / 1000.0
