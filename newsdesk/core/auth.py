"""
Admin Session Guards
====================

Decorators shared by every admin page and API route.
"""

from functools import wraps
from flask import session, redirect, url_for, request, jsonify


def current_admin():
    """Return the signed-in admin as {id, email}, or None"""
    if 'admin_id' not in session:
        return None
    return {'id': session['admin_id'], 'email': session.get('admin_email')}


def admin_required(f):
    """Redirect page requests to the admin login when no admin is signed in"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def admin_api_required(f):
    """Reject API requests with a JSON 401 when no admin is signed in"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
