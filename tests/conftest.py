import io

import pytest
from pydub import AudioSegment

from readingcheck.services.phoneme_service import DictionaryPhonemeLookup


@pytest.fixture
def phoneme_lookup():
    return DictionaryPhonemeLookup({
        "THINK": ["TH", "IH1", "NG", "K"],
        "FINK": ["F", "IH1", "NG", "K"],
        "RUN": ["R", "AH1", "N"],
        "WUN": ["W", "AH1", "N"],
    })


@pytest.fixture
def silent_wav_bytes():
    buf = io.BytesIO()
    AudioSegment.silent(duration=2000).export(buf, format="wav")
    return buf.getvalue()
