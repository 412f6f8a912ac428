from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date
from ..core.constants import XLSX_MIMETYPE
from ..core.exceptions import ExportError, StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _error(message: str, status: int):
        return jsonify({"error": message}), status

    @app.route("/api/attendance", methods=["POST"], endpoint="punch")
    def punch():
        data = request.get_json(silent=True) or {}
        punch_type = data.get("type")
        if not punch_type or not isinstance(punch_type, str):
            return _error("打刻タイプが指定されていません", 400)

        comment = data.get("comment")
        if comment is not None and not isinstance(comment, str):
            return _error("コメントの形式が正しくありません", 400)

        try:
            result = service.punch(punch_type, comment)
        except ValidationError as e:
            return _error(str(e), 400)
        except StorageError:
            return _error("サーバーエラーが発生しました", 500)

        return jsonify(
            {
                "success": True,
                "message": result.message,
                "timestamp": result.confirmed_at,
                "record": result.record.to_dict(),
            }
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="list_records")
    def list_records():
        date_s = request.args.get("date")
        date_key = None
        if date_s:
            try:
                date_key = parse_iso_date(date_s).isoformat()
            except ValueError:
                return _error("日付の形式が正しくありません (YYYY-MM-DD)", 400)

        try:
            records = service.list_records(date_key)
        except StorageError:
            return _error("記録の取得に失敗しました", 500)
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/today", methods=["GET"], endpoint="today_records")
    def today_records():
        try:
            records = service.today_records()
        except StorageError:
            return _error("記録の取得に失敗しました", 500)
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="summary")
    def summary():
        try:
            return jsonify(service.summary())
        except StorageError:
            return _error("記録の取得に失敗しました", 500)

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export_records")
    def export_records():
        try:
            report = service.export_report()
        except (StorageError, ExportError):
            return _error("Excel出力に失敗しました", 500)

        return send_file(
            io.BytesIO(report.content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=report.filename,
        )

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="delete_record")
    def delete_record(record_id: str):
        try:
            deleted = service.delete_record(record_id)
        except StorageError:
            return _error("記録の削除に失敗しました", 500)
        return jsonify({"success": deleted}), (200 if deleted else 404)
