"""
Main entry point for the Yelp bot.
Run this file to start the webhook server.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn yelp_bot.fastapi_app:create_fastapi_app --factory --host 0.0.0.0 --port 3000
"""

import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import uvicorn

from yelp_bot.config.settings import Config, get_config


def main():
    env = os.getenv("APP_ENV", "development")
    debug = get_config(env).DEBUG

    print(f"Starting Yelp bot in {env} mode...")
    print(f"Webhook listening on http://{Config.HOST}:{Config.PORT}/webhook")

    uvicorn.run(
        "yelp_bot.fastapi_app:create_fastapi_app",
        factory=True,
        host=Config.HOST,
        port=Config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )


if __name__ == "__main__":
    main()
