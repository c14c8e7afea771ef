import json
import logging
import os
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_secrets(secret_name: Optional[str] = None, region: str = "us-east-1") -> bool:
    """
    Export a Secrets Manager secret into the environment, or fall back to
    a local .env file when no secret is configured or the lookup fails.

    Returns True when the values came from Secrets Manager.
    """
    if secret_name:
        try:
            client = boto3.client("secretsmanager", region_name=region)
            response = client.get_secret_value(SecretId=secret_name)
            secret_dict = json.loads(response["SecretString"])

            for key, value in secret_dict.items():
                os.environ[key] = str(value)
            logger.info("[SECRETS] Loaded %d values from AWS Secrets Manager", len(secret_dict))
            return True
        except (BotoCoreError, ClientError, ValueError) as e:
            logger.warning("[SECRETS] AWS Secrets Manager failed: %s", e)
            logger.info("[SECRETS] Falling back to local .env")

    load_dotenv()
    return False
