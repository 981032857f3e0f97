import uuid
from flask import request, jsonify
from . import uploads_bp
from ...core.auth import admin_api_required
from ...core.config import get_config_value
from ...core.logging_service import logger
from ...core.storage import upload_file

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'mp4', 'webm', 'ogg', 'mov'}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@uploads_bp.route('', methods=['POST'])
@admin_api_required
def upload():
    """Store an uploaded media file and return its public URL"""
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']
    if file.filename == '':
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type'}), 400

    try:
        file_ext = file.filename.rsplit('.', 1)[1].lower()
        unique_filename = f"{uuid.uuid4().hex}.{file_ext}"
        url = upload_file(file.read(), unique_filename, get_config_value('UPLOAD_SUBFOLDER', 'uploads'))

        logger.info('uploads', f"Uploaded {file.filename}", details={'url': url})
        return jsonify({'url': url})

    except Exception as e:
        print(f"Error uploading file: {e}")
        logger.log_error_with_traceback('uploads', e)
        return jsonify({'error': 'Failed to upload file'}), 500
