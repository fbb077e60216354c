import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from coursereviews.config import config

logger = logging.getLogger("coursereviews")

# Initialize S3 client
s3 = boto3.client(
    "s3",
    aws_access_key_id=config.ACCESS_KEY_ID,
    aws_secret_access_key=config.SECRET_ACCESS_KEY,
    region_name=config.AWS_REGION,
)


def handout_url(reference: Optional[str]) -> Optional[str]:
    """Resolve a course handout reference to a link the browser can open.

    Absolute URLs are returned unchanged. Anything else is an object key in
    the handout bucket and gets a short-lived presigned GET URL.
    """
    if not reference:
        return None
    if reference.startswith(("http://", "https://")):
        return reference

    try:
        return s3.generate_presigned_url(
            "get_object",
            Params={"Bucket": config.HANDOUT_BUCKET, "Key": reference},
            ExpiresIn=config.HANDOUT_URL_EXPIRES,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error("Could not presign handout %s: %s", reference, e)
        return None
