from .deepgram import map_deepgram_response
from .elevenlabs import map_elevenlabs_response
from .openai import map_openai_response

__all__ = ["map_deepgram_response", "map_elevenlabs_response", "map_openai_response"]
