"""Shared Firebase Admin SDK initialization."""
from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger(__name__)


def get_firebase_app(credentials_path: str = "", project_id: str = "") -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use.

    Without a credentials file the SDK falls back to Application Default
    Credentials (GOOGLE_APPLICATION_CREDENTIALS or the metadata server).
    """
    if firebase_admin._apps:
        return firebase_admin.get_app()

    cred = credentials.Certificate(credentials_path) if credentials_path else credentials.ApplicationDefault()
    options = {"projectId": project_id} if project_id else {}
    app = firebase_admin.initialize_app(cred, options)
    logger.info("Firebase Admin SDK initialized (project=%s)", project_id or "<default>")
    return app
