import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///game2048.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated list of allowed origins for /api/*, '*' allows any
    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
    # Leaderboard pagination
    LEADERBOARD_DEFAULT_LIMIT = int(os.environ.get('LEADERBOARD_DEFAULT_LIMIT', '10'))
    LEADERBOARD_MAX_LIMIT = int(os.environ.get('LEADERBOARD_MAX_LIMIT', '100'))
    # Attempts made by the score ledger before giving up on a conflicting submission
    SUBMIT_MAX_RETRIES = int(os.environ.get('SUBMIT_MAX_RETRIES', '3'))
    # Tile value that triggers the win overlay
    WIN_TILE = int(os.environ.get('WIN_TILE', '2048'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
