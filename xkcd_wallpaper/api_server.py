#!/usr/bin/env python3
"""
xkcd Wallpaper API Server
Renders a wallpaper on request and streams it back as PNG.
"""

import os
import logging
from io import BytesIO
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS

from .models.color import Color
from .models.contrast_mode import ContrastMode
from .models.errors import DecodeError, FetchError, InvalidColor, InvalidDimensions, SaveError
from .pipeline.wallpaper_builder import build_wallpaper
from .services.comic_service import ComicService
from .services.compositor_service import CanvasCompositor
from .services.image_service import ImageService

DEFAULT_BG = os.getenv("DEFAULT_BG_COLOR", "#1F241F")

logger = logging.getLogger(__name__)


def _int_arg(name: str, required: bool = True):
    raw = request.args.get(name)
    if raw is None or raw == '':
        if required:
            raise ValueError(f"Missing required parameter '{name}'")
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Parameter '{name}' must be an integer, got {raw!r}") from None


def create_app(comic_service: ComicService = None, image_service: ImageService = None) -> Flask:
    app = Flask(__name__)
    CORS(app)  # Enable CORS for browser clients

    comic_service = comic_service or ComicService()
    image_service = image_service or ImageService()

    @app.route('/api/wallpaper', methods=['GET'])
    def wallpaper():
        """Render a wallpaper for the given size, colors and comic."""
        try:
            width = _int_arg('width')
            height = _int_arg('height')
            comic_number = _int_arg('comic', required=False)
            bg_color = Color.from_hex(request.args.get('bg', DEFAULT_BG))
            fg_mode = ContrastMode.parse(request.args.get('fg', 'light'))
            CanvasCompositor.validate_dimensions(width, height)
        except (ValueError, InvalidColor, InvalidDimensions) as e:
            return jsonify({'success': False, 'message': str(e)}), 400

        try:
            comic = comic_service.download_comic(comic_number)
            image = build_wallpaper(comic.raw_bytes, width, height, bg_color, fg_mode,
                                    image_service=image_service)
            png_bytes = image_service.encode(image, 'PNG')
        except FetchError as e:
            logger.error(f"Comic download error: {e}")
            return jsonify({'success': False, 'message': str(e)}), 502
        except DecodeError as e:
            logger.error(f"Comic decode error: {e}")
            return jsonify({'success': False, 'message': str(e)}), 422
        except SaveError as e:
            logger.error(f"Encoding error: {e}")
            return jsonify({'success': False, 'message': str(e)}), 500

        logger.info(f"Served {width}x{height} wallpaper for comic #{comic.metadata.num}")
        return send_file(
            BytesIO(png_bytes),
            mimetype='image/png',
            download_name=f"xkcd-{comic.metadata.num}-{width}x{height}.png",
        )

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'xkcd Wallpaper API is running',
        })

    @app.errorhandler(500)
    def internal_error(e):
        """Handle internal server error."""
        logger.error(f"Internal server error: {e}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


def main():
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    host = os.getenv("API_HOST", "127.0.0.1")
    port = int(os.getenv("API_PORT", "5000"))

    print("🚀 Starting xkcd Wallpaper API Server...")
    print(f"🎨 Default background: {DEFAULT_BG}")
    print("📋 Endpoints:")
    print("   GET /api/wallpaper?width=&height=&bg=&fg=&comic=")
    print("   GET /api/health")
    print("="*60)

    create_app().run(host=host, port=port)


if __name__ == '__main__':
    main()
