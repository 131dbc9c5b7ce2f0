"""Slack request verification as a FastAPI dependency."""

import hmac
import json
import logging

from fastapi import HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from jira_reactor.config import get_settings

logger = logging.getLogger(__name__)


async def verify_slack_request(request: Request) -> dict:
    """Verify the request and return the parsed JSON payload.

    Reads the raw body FIRST so the signature check uses the exact bytes
    Slack signed. Checks run only for the secrets that are configured:
    - slack_signing_secret: X-Slack-Signature / X-Slack-Request-Timestamp
    - slack_verification_token: the payload's legacy ``token`` field

    Raises HTTPException(500) on a malformed body or a failed check; nothing
    from such a request reaches the event queue.
    """
    settings = get_settings()
    body = await request.body()

    if settings.slack_signing_secret:
        verifier = SignatureVerifier(signing_secret=settings.slack_signing_secret)
        timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
        signature = request.headers.get("X-Slack-Signature", "")
        if not verifier.is_valid(body=body.decode("utf-8"), timestamp=timestamp, signature=signature):
            logger.error("Rejected Slack request with invalid signature")
            raise HTTPException(status_code=500, detail="Invalid Slack signature")

    try:
        payload = json.loads(body)
    except ValueError as exc:
        logger.error("Parse slack event: %s", exc)
        raise HTTPException(status_code=500, detail="Malformed Slack payload") from exc

    if not isinstance(payload, dict):
        logger.error("Parse slack event: payload is not an object")
        raise HTTPException(status_code=500, detail="Malformed Slack payload")

    if settings.slack_verification_token:
        token = str(payload.get("token", ""))
        if not hmac.compare_digest(token, settings.slack_verification_token):
            logger.error("Rejected Slack request with invalid verification token")
            raise HTTPException(status_code=500, detail="Invalid verification token")

    return payload
