from fastapi import FastAPI, File, Form, UploadFile, HTTPException, BackgroundTasks
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import shutil
import tempfile
import os
import logging

from .core.config import settings
from .models_api import schemas # Pydantic models
from .services import audio_service, evaluation_service, phoneme_service, speech_rate
from .services.phrase_catalog import PhraseCatalog, load_phrase_catalog

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Read-only collaborators, loaded once before any evaluation runs
phoneme_lookup = phoneme_service.load_phoneme_lookup(settings.PHONEME_DICTIONARY_PATH)
try:
    phrase_catalog = load_phrase_catalog(settings.PHRASE_SETS_PATH)
except FileNotFoundError:
    logger.error(f"Phrase catalog not found at {settings.PHRASE_SETS_PATH}. Serving an empty catalog.")
    phrase_catalog = PhraseCatalog([])

app = FastAPI(title=settings.APP_NAME, version="0.1.0")

# The reading practice front-end is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    logger.info("Application starting up...")
    if phoneme_lookup is None:
        logger.warning("No phoneme dictionary available. Similarity will use the coarse sound-alike comparator.")
    if not phrase_catalog.phrase_sets:
        logger.warning("Phrase catalog is empty. /phrases endpoints will return nothing.")
    logger.info("Startup complete.")


def _cleanup_temp_file(path: str):
    try:
        if os.path.exists(path):
            os.remove(path)
            logger.info(f"Cleaned up temporary file: {path}")
    except Exception as e:
        logger.error(f"Error cleaning up temporary file {path}: {e}")


@app.get("/health")
async def health_endpoint():
    return {
        "app": settings.APP_NAME,
        "phoneme_dictionary_loaded": phoneme_lookup is not None,
        "phrase_count": len(phrase_catalog.all_phrases()),
    }


@app.get("/phrase_sets/", response_model=List[schemas.PhraseSet])
async def list_phrase_sets_endpoint():
    return list(phrase_catalog.phrase_sets)


@app.get("/phrases/{phrase_id}", response_model=schemas.TargetPhrase)
async def get_phrase_endpoint(phrase_id: str):
    try:
        return phrase_catalog.get_phrase(phrase_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Phrase '{phrase_id}' not found.")


@app.post("/evaluate/", response_model=schemas.EvaluationResult)
async def evaluate_endpoint(request: schemas.EvaluateRequest):
    audio_signal = None
    if request.audio_duration_seconds is not None:
        audio_signal = speech_rate.DurationSignal.from_transcript(request.audio_duration_seconds, request.attempt)

    try:
        return evaluation_service.evaluate(request.target, request.attempt, phoneme_lookup, audio_signal)
    except Exception as e:
        logger.error(f"Unexpected error evaluating attempt for '{request.target.text}': {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {str(e)}")


@app.post("/evaluate_audio/", response_model=schemas.EvaluationResult)
async def evaluate_audio_endpoint(
    background_tasks: BackgroundTasks,
    phrase_id: str = Form(...),
    attempt: str = Form(""),
    audio_file: UploadFile = File(...)
):
    if not (audio_file.content_type or "").startswith("audio/"):
        raise HTTPException(status_code=400, detail="Invalid file type. Please upload an audio file.")

    try:
        target_phrase = phrase_catalog.get_phrase(phrase_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Phrase '{phrase_id}' not found.")

    # Save uploaded file temporarily so pydub can probe it
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=os.path.splitext(audio_file.filename or "")[1]) as tmp_audio:
            shutil.copyfileobj(audio_file.file, tmp_audio)
            tmp_audio_path = tmp_audio.name
        logger.info(f"Audio file saved temporarily to {tmp_audio_path}")
        background_tasks.add_task(_cleanup_temp_file, tmp_audio_path)
    except Exception as e:
        logger.error(f"Failed to save uploaded audio file: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to process uploaded file: {str(e)}")
    finally:
        audio_file.file.close()

    try:
        duration_seconds = audio_service.read_audio_duration(tmp_audio_path)
        audio_signal = speech_rate.DurationSignal.from_transcript(duration_seconds, attempt)
        return evaluation_service.evaluate(target_phrase, attempt, phoneme_lookup, audio_signal)

    except ValueError as e: # Undecodable audio
        logger.error(f"Value error during evaluation: {e}", exc_info=True)
        # Background tasks only run on a successful response
        _cleanup_temp_file(tmp_audio_path)
        raise HTTPException(status_code=400, detail=f"Invalid data or format: {str(e)}")
    except Exception as e:
        logger.error(f"Unexpected error during audio evaluation: {e}", exc_info=True)
        _cleanup_temp_file(tmp_audio_path)
        raise HTTPException(status_code=500, detail=f"An unexpected error occurred: {str(e)}")
