"""
Newsdesk server entry point.

Run with:
    python wsgi.py

Visit:
    http://localhost:5000/admin  - Admin panel
"""

from newsdesk import create_app
from newsdesk.core.config import Config

app = create_app()


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Newsdesk")
    print("=" * 60)
    print(f"Admin Panel:     http://localhost:{Config.port}/admin")
    print(f"Create Admin:    http://localhost:{Config.port}/admin/create-admin")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=True)
