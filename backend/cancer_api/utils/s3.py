import logging
import os
import tempfile

import boto3

logger = logging.getLogger(__name__)


def get_s3_client(region: str = "us-east-1"):
    # Credentials come from the default boto3 chain (env, profile, role).
    return boto3.client("s3", region_name=region)


def list_keys(s3, bucket: str, prefix: str) -> list:
    paginator = s3.get_paginator("list_objects_v2")
    keys = []
    for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
        keys.extend(obj["Key"] for obj in page.get("Contents", []))
    return keys


def download_object(s3, bucket: str, key: str, local_path: str) -> str:
    """Download into a temp file beside local_path; local_path only ever holds a complete object."""
    response = s3.get_object(Bucket=bucket, Key=key)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(local_path) or ".", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            for chunk in response["Body"].iter_chunks():
                f.write(chunk)
        os.replace(tmp_path, local_path)
    except BaseException:
        os.remove(tmp_path)
        raise
    logger.info("[S3] Downloaded s3://%s/%s -> %s", bucket, key, local_path)
    return local_path


def model_object_key(prefix: str, model_path: str) -> str:
    # A prefix ending in "/" is a folder; anything else is the full key.
    if prefix.endswith("/"):
        return prefix + os.path.basename(model_path)
    return prefix


def upload_file_to_s3(s3, local_path: str, bucket: str, key: str) -> str:
    with open(local_path, "rb") as f:
        s3.put_object(Bucket=bucket, Key=key, Body=f)
    logger.info("[S3] Uploaded %s -> s3://%s/%s", local_path, bucket, key)
    return f"s3://{bucket}/{key}"
