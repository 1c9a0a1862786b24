import os

class Settings:
    APP_NAME: str = "Reading Check Pronunciation API"
    # 'assets' is a sibling to 'core', 'services' etc. inside 'readingcheck'
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    ASSETS_DIR = os.path.join(BASE_DIR, "assets")

    PHRASE_SETS_PATH: str = os.getenv("READINGCHECK_PHRASE_SETS", os.path.join(ASSETS_DIR, "phrase_sets.json"))
    # Optional override: a CMU-format pronouncing dictionary file ("WORD  P1 P2 ...").
    # Unset means the dictionary bundled with the cmudict package.
    PHONEME_DICTIONARY_PATH: str = os.getenv("READINGCHECK_PHONEME_DICT", "")

    # Alignment thresholds. Independent tunables, not derived from each other.
    ACCEPT_THRESHOLD: float = 0.6       # a candidate must score strictly above this to match
    CLEAN_MATCH_THRESHOLD: float = 0.9  # matched words at or above this are pronounced correctly

    # Syllables per second above which the advisory "speak slower" hint is added
    FAST_SPEECH_RATE: float = 5.5

    LOG_LEVEL: str = os.getenv("READINGCHECK_LOG_LEVEL", "INFO")

settings = Settings()
