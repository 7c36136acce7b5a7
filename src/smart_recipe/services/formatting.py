"""Display helpers for recipe images and dates."""

import re
from datetime import UTC, datetime

FALLBACK_IMAGE = "/logo.svg"
DEFAULT_BUCKET = "smart-recipe-generator"
DEFAULT_REGION = "us-east-2"

_LEGACY_PATH = re.compile(r"\.s3\.amazonaws\.com/(.+)$")


def normalize_s3_image_url(
    img_link: str | None,
    bucket: str = DEFAULT_BUCKET,
    region: str = DEFAULT_REGION,
) -> str:
    """Rewrite legacy bucket-only S3 URLs to their region-qualified form.

    Empty links fall back to the site logo; non-bucket and already
    region-qualified URLs are returned trimmed.
    """
    if not img_link:
        return FALLBACK_IMAGE
    trimmed = img_link.strip()
    if f"{bucket}.s3" not in trimmed:
        return trimmed
    if f".s3.{region}.amazonaws.com" in trimmed:
        return trimmed
    match = _LEGACY_PATH.search(trimmed)
    if match:
        path = match.group(1).strip()
        return f"https://{bucket}.s3.{region}.amazonaws.com/{path}"
    return trimmed


def format_date(value: str) -> str:
    """Format an ISO timestamp as ``DD Mon YYYY`` in UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC).strftime("%d %b %Y")
