"""Audio capture and speech-recognition stream adapters."""
