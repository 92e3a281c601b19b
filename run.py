"""
Entry point for running the Wellcheck API in development.

This module imports the application factory and starts the development
server when executed directly. In production a WSGI server like gunicorn
should serve ``wsgi:app`` instead.
"""

from wellcheck import create_app, init_db

app = create_app()

if __name__ == "__main__":
    # Local development only. Production deployments manage migrations
    # separately and seed with ``flask seed-tips``.
    with app.app_context():
        init_db()
    app.run(host="0.0.0.0", port=5000, debug=True)
