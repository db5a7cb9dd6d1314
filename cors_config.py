# CORS configuration
import os

from flask_cors import CORS


def configure_cors(app):
    # Read-only API: allow GET from configured origins (comma-separated)
    origins = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',') if o.strip()]
    CORS(app, resources={
        r"/api/*": {
            "origins": origins,
            "methods": ["GET", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })
    return app
