# trainify/routers/media_router.py

"""
API router for the media collaborators: text-to-speech and image generation.
"""

from fastapi import APIRouter, Depends

from trainify.dependencies import get_image_generator, get_speech_synthesizer
from trainify.image_generator import ImageGenerator
from trainify.schemas import ImageRequest, TextToSpeechRequest
from trainify.speech import SpeechSynthesizer


router = APIRouter()


@router.post("/text-to-speech", summary="Synthesize Speech")
async def text_to_speech(req: TextToSpeechRequest, synthesizer: SpeechSynthesizer = Depends(get_speech_synthesizer)):
    """
    Reads `req.text` aloud with the requested voice.

    Returns:
        dict: The MP3 audio as base64 `audioContent`, its MIME type and the voice used.
    """
    clip = await synthesizer.synthesize(req.text, req.voice)
    return {"audioContent": clip.to_base64(), "mimeType": clip.mime_type, "voice": clip.voice}


@router.post("/generate-image", summary="Generate an Exercise or Meal Image")
async def generate_image(req: ImageRequest, generator: ImageGenerator = Depends(get_image_generator)):
    """
    Generates one illustration for an exercise or a meal.

    Returns:
        dict: The hosted image URL as `imageUrl`.
    """
    url = await generator.generate(req.prompt, req.type)
    return {"imageUrl": url}
