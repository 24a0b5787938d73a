"""
Storage configuration for Sativar.
Supports AWS S3 for production and local storage for development.
Uploaded files are company logos and nothing else.
"""
import os
from pathlib import Path

USE_S3 = os.getenv('USE_S3_STORAGE', 'false').lower() == 'true'


def get_storage_settings(base_dir: Path) -> dict:
    """
    Returns storage-related settings based on environment configuration.

    Args:
        base_dir: The BASE_DIR from Django settings

    Returns:
        Dictionary of storage settings to be merged into Django settings
    """
    staticfiles = {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'}

    if USE_S3:
        return {
            'STORAGES': {
                'default': {
                    'BACKEND': 'storages.backends.s3.S3Storage',
                    'OPTIONS': {
                        'bucket_name': os.getenv('AWS_STORAGE_BUCKET_NAME', 'sativar-media'),
                        'region_name': os.getenv('AWS_S3_REGION_NAME', 'sa-east-1'),
                        'file_overwrite': False,
                        'default_acl': 'private',
                        'custom_domain': os.getenv('AWS_S3_CUSTOM_DOMAIN') or None,
                        'querystring_auth': True,  # Signed URLs for private files
                    },
                },
                'staticfiles': staticfiles,
            },
            'AWS_ACCESS_KEY_ID': os.getenv('AWS_ACCESS_KEY_ID'),
            'AWS_SECRET_ACCESS_KEY': os.getenv('AWS_SECRET_ACCESS_KEY'),
            'MEDIA_URL': '/media/',
        }

    return {
        'STORAGES': {
            'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
            'staticfiles': staticfiles,
        },
        'MEDIA_URL': '/media/',
        'MEDIA_ROOT': base_dir / 'media',
    }


def is_s3_enabled() -> bool:
    """Check if S3 storage is enabled."""
    return USE_S3
