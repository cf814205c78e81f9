"""Run the bot with uvicorn: ``python -m akabot``."""

import uvicorn

from akabot.app import app, app_config

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=app_config.port, log_level="info")
