# scripts/publish_model.py

import argparse
import logging
import os

import onnx

# Load secrets from AWS or .env
from cancer_api.utils.secrets import load_secrets
load_secrets(os.getenv("SECRET_NAME"), os.getenv("AWS_REGION", "us-east-1"))

from cancer_api.config import get_settings  # noqa: E402
from cancer_api.utils.s3 import get_s3_client, model_object_key, upload_file_to_s3  # noqa: E402

logger = logging.getLogger("publish_model")


def publish_model(model_path: str, bucket: str, key: str, region: str) -> str:
    model = onnx.load(model_path)
    onnx.checker.check_model(model)
    logger.info("ONNX model %s passed the checker", model_path)

    s3 = get_s3_client(region)
    return upload_file_to_s3(s3, model_path, bucket, key)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Upload the classifier to the model bucket")
    parser.add_argument("model_path", help="local .onnx file")
    parser.add_argument("--bucket", default=settings.model_bucket)
    parser.add_argument("--prefix", default=settings.model_prefix)
    args = parser.parse_args()

    uri = publish_model(args.model_path, args.bucket, model_object_key(args.prefix, args.model_path), settings.aws_region)
    print(f"Published: {uri}")
