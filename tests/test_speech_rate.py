import os
import subprocess
import sys
from pathlib import Path

from readingcheck.services.speech_rate import DurationSignal, estimate_syllables

BACKEND_DIR = Path(__file__).parent.parent / "backend"


def test_estimate_syllables():
    assert estimate_syllables("I am strong") == 3
    assert estimate_syllables("Think happy thoughts") == 4
    assert estimate_syllables("") == 0


def test_speech_rate():
    assert DurationSignal(2.0, 6).speech_rate() == 3.0
    assert DurationSignal.from_transcript(1.0, "I am strong").speech_rate() == 3.0


def test_zero_duration_has_no_rate():
    assert DurationSignal(0.0, 3).speech_rate() == 0.0


def test_engine_does_not_import_pydub():
    # Fresh interpreter so modules loaded by other tests don't count
    env = dict(os.environ, PYTHONPATH=os.pathsep.join([str(BACKEND_DIR), os.environ.get("PYTHONPATH", "")]))
    code = (
        "import sys\n"
        "import readingcheck.services.evaluation_service\n"
        "assert 'pydub' not in sys.modules, 'pydub imported'\n"
    )
    result = subprocess.run([sys.executable, "-c", code], env=env, capture_output=True, text=True)
    assert result.returncode == 0, result.stderr
