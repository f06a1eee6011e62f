import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from the project directory
env_path = Path(__file__).parent / '.env'
load_dotenv(env_path)


class Config:
    API_TITLE = os.getenv('API_TITLE', 'Settlement Engine API')
    API_VERSION = os.getenv('API_VERSION', '1.0.0')

    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8000'))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Comma separated list, "*" allows any origin
    CORS_ORIGINS = [origin.strip() for origin in os.getenv('CORS_ORIGINS', '*').split(',') if origin.strip()]
