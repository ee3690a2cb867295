import os

import uvicorn

# Determine environment: "prod" or "local"
ENV = os.getenv("ENV", "local").lower()

# Default settings
HOST = "localhost"
PORT = int(os.getenv("PORT", "8000"))
RELOAD = True  # Enable live reload in local development

# Production config
if ENV == "prod":
    HOST = "0.0.0.0"
    RELOAD = False

if __name__ == "__main__":
    uvicorn.run("tiger.main:app", host=HOST, port=PORT, reload=RELOAD)
