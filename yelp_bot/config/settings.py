"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    # App settings
    TESTING = os.getenv("TESTING", "false").lower() in {"1", "true", "yes", "on"}
    DEBUG = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes", "on"}
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Watson Work Services
    # App id and secret are obtained by registering the app at
    # https://developer.watsonwork.ibm.com
    WATSON_WORK_URL = os.getenv("WATSON_WORK_URL", "https://api.watsonwork.ibm.com")
    APP_ID = os.getenv("APP_ID", "")
    APP_SECRET = os.getenv("APP_SECRET", "")
    # Shared secret issued when the webhook is registered
    WEBHOOK_SECRET = os.getenv("WEBHOOK_SECRET", "")
    BOT_MESSAGE_TITLE = os.getenv("BOT_MESSAGE_TITLE", "Yelp Search")
    BOT_MESSAGE_COLOR = os.getenv("BOT_MESSAGE_COLOR", "#D5212B")

    # Yelp Fusion
    YELP_API_URL = os.getenv("YELP_API_URL", "https://api.yelp.com")
    YELP_ID = os.getenv("YELP_ID", "")
    YELP_SECRET = os.getenv("YELP_SECRET", "")
    YELP_SEARCH_TERM = os.getenv("YELP_SEARCH_TERM", "food")
    YELP_SEARCH_LIMIT = int(os.getenv("YELP_SEARCH_LIMIT", "5"))

    # Outbound HTTP
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

    # Observability
    METRICS_ENABLED = os.getenv("METRICS_ENABLED", "true").lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
