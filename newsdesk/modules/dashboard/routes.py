"""
Admin Dashboard Routes
======================

Authentication and dashboard interface for admin users.
"""

import sqlite3
from flask import render_template, request, redirect, url_for, flash, session, jsonify
from werkzeug.security import generate_password_hash, check_password_hash
from . import dashboard_bp
from ...core.auth import admin_required
from ...core.config import get_config_value
from ...core.database import Database
from ...core.logging_service import logger

MIN_PASSWORD_LENGTH = 6


def get_db_config():
    return get_config_value('USER_DB', 'users.db')


def init_admin_table():
    """Initialize admin table if it doesn't exist"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS admin (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        conn.commit()


def count_admins():
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM admin")
        return cursor.fetchone()[0]


def create_admin_db(email, password):
    """Create admin account, raises sqlite3.IntegrityError on duplicate email"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO admin (email, password_hash) VALUES (?, ?)",
            (email, generate_password_hash(password))
        )
        conn.commit()
        return cursor.lastrowid


def verify_admin_db(email, password):
    """Return the admin row for valid credentials, otherwise None"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, email, password_hash FROM admin WHERE email = ?", (email,))
        admin = cursor.fetchone()

    if admin and check_password_hash(admin['password_hash'], password):
        return {'id': admin['id'], 'email': admin['email']}
    return None


def _safe_next(target):
    """Only follow local redirect targets"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html'), 400

        admin = verify_admin_db(email, password)
        if admin:
            session['admin_id'] = admin['id']
            session['admin_email'] = admin['email']
            logger.log_user_action('dashboard', 'login', user_id=str(admin['id']))
            flash('Login successful', 'success')
            return redirect(_safe_next(request.args.get('next')) or url_for('admin.dashboard'))

        logger.warning('dashboard', 'Failed admin login', details={'email': email})
        flash('Invalid email or password', 'error')
        return render_template('dashboard/login.html'), 401

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    session.pop('admin_id', None)
    session.pop('admin_email', None)
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin dashboard with content counts"""
    from ..articles.database import count_articles_db
    from ..categories.routes import get_all_categories_db

    stats = count_articles_db()
    stats['categories'] = len(get_all_categories_db())
    return render_template('dashboard/dashboard.html', stats=stats)


@dashboard_bp.route('/create-admin', methods=['GET', 'POST'])
def create_admin():
    """Create new admin (only accessible by existing admin or if no admins exist)"""
    if count_admins() > 0 and 'admin_id' not in session:
        return redirect(url_for('admin.login'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password', '')

        if not all([email, password, confirm_password]):
            flash('All fields are required', 'error')
            return render_template('dashboard/create_admin.html'), 400

        if password != confirm_password:
            flash('Passwords do not match', 'error')
            return render_template('dashboard/create_admin.html'), 400

        if len(password) < MIN_PASSWORD_LENGTH:
            flash(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long', 'error')
            return render_template('dashboard/create_admin.html'), 400

        try:
            create_admin_db(email, password)
        except sqlite3.IntegrityError:
            flash('An admin with this email already exists', 'error')
            return render_template('dashboard/create_admin.html'), 400

        logger.log_user_action('dashboard', f"Created admin {email}")
        flash(f'Admin {email} created successfully', 'success')
        if 'admin_id' in session:
            return redirect(url_for('admin.dashboard'))
        return redirect(url_for('admin.login'))

    return render_template('dashboard/create_admin.html')


@dashboard_bp.route('/status')
def status():
    """Check admin login status (API endpoint)"""
    if 'admin_id' in session:
        return jsonify({
            'logged_in': True,
            'admin_email': session.get('admin_email')
        })
    return jsonify({'logged_in': False}), 401
