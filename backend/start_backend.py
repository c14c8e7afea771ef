# backend/start_backend.py
import logging
import os

import uvicorn

from cancer_api.utils.secrets import load_secrets

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Load secrets from AWS Secrets Manager or .env before settings are read
load_secrets(os.getenv("SECRET_NAME"), os.getenv("AWS_REGION", "us-east-1"))

# Start FastAPI app
if __name__ == "__main__":
    uvicorn.run("cancer_api.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 3000)), reload=False)
