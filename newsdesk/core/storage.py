"""
Storage Utility
===============

Shared file upload with cloud (DigitalOcean Spaces) / local branching.
"""

import os
from urllib.parse import urlparse
from flask import current_app
from .config import get_config_value

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'mp4': 'video/mp4', 'webm': 'video/webm', 'ogg': 'video/ogg',
    'mov': 'video/quicktime',
}


def guess_content_type(filename):
    """Guess content type from extension"""
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(ext, 'application/octet-stream')


def is_cloud_storage():
    return get_config_value('STORAGE_TYPE', 'local') == 'cloud'


def get_do_spaces_config():
    """Get DigitalOcean Spaces configuration"""
    return {
        'region': get_config_value('DO_SPACES_REGION'),
        'space_name': get_config_value('DO_SPACES_NAME'),
        'access_key': get_config_value('DO_SPACES_KEY'),
        'secret_key': get_config_value('DO_SPACES_SECRET'),
    }


def upload_file(file_bytes, filename, subfolder):
    """Upload file to cloud storage or local filesystem.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Target filename (e.g. "abc123.jpg").
        subfolder: Subfolder name (e.g. "uploads").

    Returns:
        Public URL (cloud) or local path like "/static/uploads/abc.jpg" (local).
    """
    if is_cloud_storage():
        return _upload_to_spaces(file_bytes, filename, subfolder)
    return _save_locally(file_bytes, filename, subfolder)


def _spaces_client(config):
    import boto3
    region = config['region']
    return boto3.client(
        's3',
        region_name=region,
        endpoint_url=f"https://{region}.digitaloceanspaces.com",
        aws_access_key_id=config['access_key'],
        aws_secret_access_key=config['secret_key'],
    )


def _upload_to_spaces(file_bytes, filename, subfolder):
    """Upload to DigitalOcean Spaces via boto3."""
    config = get_do_spaces_config()
    region = config['region']
    space_name = config['space_name']

    app_prefix = get_config_value('SPACES_FOLDER', 'newsdesk')
    object_key = f"{app_prefix}/{subfolder}/{filename}"

    _spaces_client(config).put_object(
        Bucket=space_name,
        Key=object_key,
        Body=file_bytes,
        ACL='public-read',
        ContentType=guess_content_type(filename),
    )

    return f"https://{space_name}.{region}.digitaloceanspaces.com/{object_key}"


def _save_locally(file_bytes, filename, subfolder):
    """Save to local static folder."""
    upload_dir = os.path.join(current_app.static_folder, subfolder)
    os.makedirs(upload_dir, exist_ok=True)
    filepath = os.path.join(upload_dir, filename)
    with open(filepath, 'wb') as f:
        f.write(file_bytes)
    return f"/static/{subfolder}/{filename}"


def delete_file(file_url):
    """Delete a file by its URL (cloud or local).

    Returns True when a file was removed.
    """
    if not file_url:
        return False

    if 'digitaloceanspaces.com' in file_url:
        config = get_do_spaces_config()
        object_key = urlparse(file_url).path.lstrip('/')
        _spaces_client(config).delete_object(Bucket=config['space_name'], Key=object_key)
        return True

    # file_url looks like /static/subfolder/filename.jpg
    if file_url.startswith('/static/'):
        rel_path = file_url[len('/static/'):]
        full_path = os.path.join(current_app.static_folder, rel_path)
        if os.path.isfile(full_path):
            os.unlink(full_path)
            return True
    return False
