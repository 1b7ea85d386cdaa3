"""
HMO logo uploads.

Files go through Django's default storage under ``logos/`` with a random
suffix so two uploads of ``logo.png`` never collide.  The returned
``url`` is what gets stored as an HMO's ``logoUrl``.
"""
from __future__ import annotations

import os
import secrets
from urllib.parse import urljoin

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from ..errors import ActionError
from .audit import log_action
from .base import action

UPLOAD_DIR = 'logos'


def _allowed(content_type: str) -> bool:
    prefixes = getattr(settings, 'ALLOWED_LOGO_TYPES', ['image/'])
    return any((content_type or '').startswith(p) for p in prefixes)


@action(unauthorized='You must be logged in to upload files', failure='Upload failed')
def store_logo(principal, filename: str, content: bytes, content_type: str, base_url: str | None = None) -> dict:
    if not filename:
        raise ActionError.invalid('filename', 'Filename is required')
    if not content:
        raise ActionError.invalid('file', 'No file provided')
    if not _allowed(content_type):
        raise ActionError.invalid('file', 'Only image files can be uploaded')
    max_mb = getattr(settings, 'LOGO_UPLOAD_MAX_MB', 5)
    if len(content) > max_mb * 1024 * 1024:
        raise ActionError.invalid('file', f'File is larger than {max_mb} MB')

    stem, ext = os.path.splitext(get_valid_filename(os.path.basename(filename)))
    name = f"{UPLOAD_DIR}/{stem or 'logo'}-{secrets.token_hex(8)}{ext.lower()}"
    pathname = default_storage.save(name, ContentFile(content))
    url = default_storage.url(pathname)
    if base_url:
        url = urljoin(base_url, url)

    log_action(user_id=principal.id, action='upload.logo', object_type='file',
               detail={'pathname': pathname, 'size': len(content), 'contentType': content_type})
    return {'url': url, 'pathname': pathname, 'contentType': content_type, 'size': len(content)}
