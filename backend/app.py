#!/usr/bin/env python3

from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from io import BytesIO
import logging
from werkzeug.utils import secure_filename
from pydantic import ValidationError
from typing import Optional

from chunk_store import ChunkStore
from config_manager import ConfigManager
from errors import QuoteConversionError, make_error_payload
from models.api_models import UploadChunkRequest, UploadChunkResponse
from models.config_models import (
    ConfigUpdateRequest,
    ConfigInquiryResponse,
    ConfigUpdateResponse
)
from quote_converter import QuoteConverter


class App:
    """Quote conversion server: workbook upload in, structured quote out"""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.app = Flask(__name__)
        CORS(self.app)

        # Configuration manager
        self.config_manager = config_manager or ConfigManager()
        configs = self.config_manager.get_all_configs()

        self.converter = QuoteConverter(configs.parser)
        self.chunk_store = ChunkStore(expiry_seconds=configs.upload.chunk_expiry_seconds)

        # Setup Flask routes
        self.setup_routes()

    def _reload_converter(self):
        """Rebuild the converter with updated configuration"""
        configs = self.config_manager.get_all_configs()
        self.converter = QuoteConverter(configs.parser)
        self.chunk_store.expiry_seconds = configs.upload.chunk_expiry_seconds
        logging.info("Converter reloaded with updated configuration")

    def _read_upload(self):
        """Workbook bytes from a direct upload or a finished chunked upload"""
        upload_id = request.form.get('uploadId')
        if upload_id:
            data = self.chunk_store.take_complete(upload_id)
            if data is not None:
                return data, upload_id, None

            progress = self.chunk_store.progress(upload_id)
            if progress is None:
                return None, upload_id, (make_error_payload('upload', 'Upload not found'), 404)
            return None, upload_id, (make_error_payload(
                'upload', 'Upload is not complete',
                {'received': progress.received, 'total': progress.total}
            ), 409)

        file = request.files.get('file')
        if file is None or not file.filename:
            return None, None, (make_error_payload('upload', 'Missing Excel file upload'), 400)
        return file.read(), secure_filename(file.filename), None

    def setup_routes(self):
        """Setup Flask routes"""

        # ========== CONVERSION ROUTES ==========

        @self.app.route('/api/convert', methods=['POST'])
        def convert_route():
            """Convert an uploaded workbook into the structured quote"""
            data, source, error = self._read_upload()
            if error:
                payload, status = error
                return jsonify(payload), status

            try:
                logging.info(f"Converting workbook: {source} ({len(data)} bytes)")
                result = self.converter.convert(data)
            except QuoteConversionError as e:
                logging.warning(f"Conversion rejected for {source}: {e}")
                return jsonify(make_error_payload('convert', e)), 400
            except Exception as e:
                logging.error(f"Error converting workbook {source}: {e}", exc_info=True)
                return jsonify(make_error_payload('convert', e)), 500

            return jsonify(result.to_payload())

        @self.app.route('/api/upload-chunk', methods=['POST'])
        def upload_chunk_route():
            """Receive one chunk of a large workbook upload"""
            chunk = request.files.get('chunk')
            try:
                chunk_request = UploadChunkRequest.model_validate(request.form.to_dict())
            except ValidationError as e:
                logging.warning(f"Invalid chunk upload: {e}")
                chunk_request = None

            if chunk is None or chunk_request is None:
                return jsonify(make_error_payload('upload', 'Missing required chunk data')), 400

            try:
                progress = self.chunk_store.add_chunk(
                    upload_id=chunk_request.upload_id,
                    chunk_index=chunk_request.chunk_index,
                    total_chunks=chunk_request.total_chunks,
                    data=chunk.read(),
                    file_name=chunk_request.file_name
                )
            except ValueError as e:
                return jsonify(make_error_payload('upload', e)), 400

            if progress.complete:
                response = UploadChunkResponse(
                    success=True,
                    upload_id=progress.upload_id,
                    complete=True,
                    message="File upload complete"
                )
            else:
                response = UploadChunkResponse(
                    success=True,
                    upload_id=progress.upload_id,
                    complete=False,
                    received=progress.received,
                    total=progress.total
                )
            return jsonify(response.to_payload())

        @self.app.route('/api/upload-chunk', methods=['GET'])
        def upload_status_route():
            """Report chunk progress, or return the reassembled file"""
            upload_id = request.args.get('uploadId')
            if not upload_id:
                return jsonify(make_error_payload('upload', 'Missing uploadId')), 400

            progress = self.chunk_store.progress(upload_id)
            if progress is None:
                return jsonify(make_error_payload('upload', 'Upload not found')), 404

            if not progress.complete:
                return jsonify({'complete': False, 'received': progress.received, 'total': progress.total})

            return send_file(
                BytesIO(self.chunk_store.get_complete(upload_id)),
                mimetype='application/octet-stream',
                as_attachment=True,
                download_name=progress.file_name
            )

        # ========== CONFIGURATION ROUTES ==========

        @self.app.route('/api/config/inquiry', methods=['GET'])
        def config_inquiry_route():
            """Get current configuration"""
            return ConfigInquiryResponse(
                success=True,
                configs=self.config_manager.get_all_configs()
            ).model_dump()

        @self.app.route('/api/config/update', methods=['POST'])
        def config_update_route():
            """Update one configuration section"""
            try:
                update_request = ConfigUpdateRequest(**(request.get_json(silent=True) or {}))
            except ValidationError as e:
                return ConfigUpdateResponse(
                    success=False,
                    message="Configuration update failed",
                    error=str(e)
                ).model_dump(), 400

            if not self.config_manager.update_config(update_request):
                return ConfigUpdateResponse(
                    success=False,
                    message="Failed to update configuration",
                    error="Update operation failed"
                ).model_dump(), 400

            self._reload_converter()
            return ConfigUpdateResponse(
                success=True,
                message="Configuration updated successfully",
                updated_section=update_request.section.value
            ).model_dump()

    def run(self, host: str = 'localhost', port: int = 5000, debug: bool = True):
        """Run the Flask application"""
        logging.info(f"Quote conversion server starting on http://{host}:{port}")
        self.app.run(host=host, port=port, debug=debug)
