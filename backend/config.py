import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list, or '*' for any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Pause between revealing both cards and resolving them (seconds)
    REVEAL_DELAY_SEC = float(os.environ.get('REVEAL_DELAY_SEC', '2'))
    STARTING_HP = int(os.environ.get('STARTING_HP', '25'))
    HAND_SIZE = int(os.environ.get('HAND_SIZE', '5'))
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '5'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
