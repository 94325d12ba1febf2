#!/usr/bin/env python3
"""
Main application runner for the quote conversion server.
"""

import os
import sys
import argparse
import logging


def setup_logging(debug: bool = False):
    """Setup consistent logging format"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler('app.log')
        ]
    )


def main():
    """Main application entry point"""
    parser = argparse.ArgumentParser(description='Interior quote workbook converter')
    parser.add_argument('--port', type=int, default=5000, help='Port to run the server on')
    parser.add_argument('--host', type=str, default='localhost', help='Host to run the server on')
    parser.add_argument('--config', type=str, default=None, help='Path to the JSON configuration file')
    parser.add_argument('--debug', action='store_true', help='Run in debug mode')

    args = parser.parse_args()

    # Setup logging
    setup_logging(args.debug)

    from backend.app import App
    from config_manager import ConfigManager

    server = App(ConfigManager(args.config))

    print("🚀 Starting Interior Quote Converter")
    print("=" * 70)
    print(f"🌐 Server on http://{args.host}:{args.port}")
    print("📝 Available API endpoints:")
    print("      POST /api/convert")
    print("      POST /api/upload-chunk")
    print("      GET  /api/upload-chunk?uploadId=<id>")
    print("      GET  /api/config/inquiry")
    print("      POST /api/config/update")
    print("")
    print("   🎯 Preview: streamlit run streamlit_frontend.py")
    print("=" * 70)

    # Use 0.0.0.0 for Docker compatibility, localhost for local dev
    host = "0.0.0.0" if os.getenv('FLASK_ENV') == 'production' else args.host
    server.run(host=host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
