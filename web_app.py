#!/usr/bin/env python3
"""
Read-only Flask API over the stored news records.

    GET /api/news/between?start=2024-03-01T00:00&end=2024-03-02T00:00
    GET /api/health
"""

import logging
from datetime import datetime, timezone

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from cors_config import configure_cors
from midnews.config import Config
from midnews.ingestion.news_types import normalize_timestamp
from midnews.storage.news_store import StoreError, open_store

logger = logging.getLogger(__name__)


def _parse_iso(value, name):
    if not value or not value.strip():
        raise ValueError(f"'{name}' is required")
    try:
        return normalize_timestamp(datetime.fromisoformat(value.strip()))
    except ValueError:
        raise ValueError(f"'{name}' must be an ISO-8601 date-time")


def create_app(store=None, config=None):
    if store is None:
        store = open_store(config or Config.from_env())
    app = Flask(__name__)
    app = configure_cors(app)
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=["1000 per day", "100 per hour"],
        storage_uri="memory://"
    )
    limiter.init_app(app)

    app.extensions['news_store'] = store

    @app.route('/api/health')
    @limiter.exempt
    def health_check():
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
        })

    @app.route('/api/news/between')
    @limiter.limit("30 per minute")
    def get_news_between():
        """News published between `start` and `end` (inclusive), oldest first"""
        try:
            start = _parse_iso(request.args.get('start'), 'start')
            end = _parse_iso(request.args.get('end'), 'end')
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400
        if start > end:
            return jsonify({'success': False, 'error': "'start' must not be after 'end'"}), 400

        try:
            records = app.extensions['news_store'].find_between(start, end)
        except StoreError as e:
            logger.error(f"Store error in get_news_between: {e}")
            return jsonify({
                'success': False,
                'error': 'Failed to fetch news',
                'message': str(e)
            }), 500

        data = [r.to_dict() for r in records]
        return jsonify({
            'success': True,
            'data': data,
            'count': len(data),
            'timestamp': datetime.now(timezone.utc).isoformat()
        })

    return app


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=logging.INFO)
    cfg = Config.from_env()
    create_app(config=cfg).run(host=cfg.api_host, port=cfg.api_port)
