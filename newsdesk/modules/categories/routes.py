"""
Category Routes
===============

List, create, rename and delete categories.
Articles keep their own copy of the category name, so nothing here
touches the articles table.
"""

from flask import render_template, request, jsonify
from . import categories_api_bp, categories_admin_bp
from ...core.auth import admin_required, admin_api_required
from ...core.config import get_config_value
from ...core.database import Database
from ...core.logging_service import logger

# ===== Database Helper Functions =====

def get_db_config():
    """Get database path"""
    return get_config_value('NEWS_DB', 'news.db')

def init_categories_db():
    """Initialize categories table"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS categories (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        conn.commit()

def _row_to_category(row):
    return {'id': row['id'], 'name': row['name']}

def get_all_categories_db():
    """Get all categories in creation order"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT id, name FROM categories ORDER BY created_at ASC, rowid ASC')
        return [_row_to_category(row) for row in cursor.fetchall()]

def get_category_db(category_id):
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT id, name FROM categories WHERE id = ?', (category_id,))
        row = cursor.fetchone()
        return _row_to_category(row) if row else None

def create_category_db(name):
    """Create new category. Duplicate names are allowed."""
    category_id = Database.new_id()
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('INSERT INTO categories (id, name) VALUES (?, ?)', (category_id, name))
        conn.commit()
    return {'id': category_id, 'name': name}

def update_category_db(category_id, name):
    """Rename category, returns the updated record or None"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('UPDATE categories SET name = ? WHERE id = ?', (name, category_id))
        conn.commit()
        if cursor.rowcount == 0:
            return None
    return {'id': category_id, 'name': name}

def delete_category_db(category_id):
    """Delete category, returns True if a row was removed"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('DELETE FROM categories WHERE id = ?', (category_id,))
        conn.commit()
        return cursor.rowcount > 0

def _valid_name(data):
    if not isinstance(data, dict):
        return None
    name = data.get('name')
    if not isinstance(name, str) or not name.strip():
        return None
    return name

# ===== API Routes =====

@categories_api_bp.route('', methods=['GET'])
@admin_api_required
def list_categories():
    """Get all categories"""
    try:
        return jsonify({'categories': get_all_categories_db()})
    except Exception as e:
        print(f"GET /categories error: {e}")
        logger.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Internal Server Error'}), 500

@categories_api_bp.route('', methods=['POST'])
@admin_api_required
def create_category():
    """Create new category"""
    try:
        name = _valid_name(request.get_json(silent=True))
        if name is None:
            return jsonify({'error': 'Name is required'}), 400

        category = create_category_db(name)
        logger.log_user_action('categories', f"Created category {name}")
        return jsonify({'category': category}), 201
    except Exception as e:
        print(f"POST /categories error: {e}")
        logger.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Internal Server Error'}), 500

@categories_api_bp.route('/<category_id>', methods=['PUT'])
@admin_api_required
def update_category(category_id):
    """Rename category"""
    try:
        name = _valid_name(request.get_json(silent=True))
        if name is None:
            return jsonify({'error': 'Name is required'}), 400

        category = update_category_db(category_id, name)
        if not category:
            return jsonify({'error': 'Category not found'}), 404
        return jsonify({'category': category})
    except Exception as e:
        print(f"PUT /categories/{category_id} error: {e}")
        logger.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Internal Server Error'}), 500

@categories_api_bp.route('/<category_id>', methods=['DELETE'])
@admin_api_required
def delete_category(category_id):
    """Delete category"""
    try:
        if not delete_category_db(category_id):
            return jsonify({'error': 'Category not found'}), 404
        logger.log_user_action('categories', f"Deleted category {category_id}")
        return jsonify({'message': 'Category deleted'})
    except Exception as e:
        print(f"DELETE /categories/{category_id} error: {e}")
        logger.log_error_with_traceback('categories', e)
        return jsonify({'error': 'Internal Server Error'}), 500

# ===== Admin Page =====

@categories_admin_bp.route('/')
@admin_required
def categories_page():
    """Category management page"""
    return render_template('categories/categories.html')
