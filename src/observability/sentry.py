"""Sentry error reporting for the API and the Discord bot."""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration


def init_sentry(service: str) -> bool:
    """Start Sentry if SENTRY_DSN is set.

    ERROR logs become events and INFO logs become breadcrumbs, so a failed
    Notion call arrives with the requests that led up to it.

    :param service: Process name attached to every event as the "service" tag.
    :returns: True if Sentry was initialised.
    """
    dsn = os.environ.get("SENTRY_DSN")
    if not dsn:
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        environment=os.environ.get("APP_ENV", "local"),
        send_default_pii=False,
        traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "1.0")),
    )
    sentry_sdk.set_tag("service", service)
    return True
