"""
Scan API Blueprint
Exposes scanning, job tracking and applying of proposed moves
"""

from pathlib import Path

from flask import Blueprint, jsonify, request

from ..errors import ScanError
from ..monitoring import get_logger, get_performance_tracker
from ..services import move_service as move_module
from ..services import scan_service as scan_module
from ..services.move_service import MoveRequest
from ..settings import config

scans_bp = Blueprint('scans', __name__, url_prefix='/api')

logger = get_logger('scans_api')


def _threshold_from(data):
    value = data.get('threshold')
    if value is None:
        return config.match_threshold
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise ScanError(f"Invalid threshold: {value!r}") from None
    if threshold < 0:
        raise ScanError(f"Threshold must be non-negative: {threshold}")
    return threshold


def _roots_from(data):
    source_dir = data.get('source_dir') or config.source_dir
    destination_root = data.get('destination_root') or config.destination_root
    return source_dir, destination_root


@scans_bp.route('/scan', methods=['POST'])
def scan():
    """Propose moves for every source document; pass async=true to run as a job"""
    data = request.get_json(silent=True) or {}
    source_dir, destination_root = _roots_from(data)
    threshold = _threshold_from(data)

    if data.get('async'):
        job_id = scan_module.scan_service.submit_scan(source_dir, destination_root, threshold)
        return jsonify({'job_id': job_id, 'status': 'pending'}), 202

    result = scan_module.scan_service.run_scan(source_dir, destination_root, threshold)
    logger.info("Scan served",
                source_dir=source_dir,
                destination_root=destination_root,
                candidates=len(result.candidates))
    return jsonify(result.to_dict())


@scans_bp.route('/scan/<job_id>', methods=['GET'])
def get_scan(job_id):
    status = scan_module.scan_service.get_job_status(job_id)
    if status is None:
        return jsonify({'error': 'Scan job not found'}), 404
    return jsonify(status)


@scans_bp.route('/scan/<job_id>', methods=['DELETE'])
def cancel_scan(job_id):
    """Cancel a pending or running scan job"""
    if scan_module.scan_service.get_job(job_id) is None:
        return jsonify({'error': 'Scan job not found'}), 404

    if not scan_module.scan_service.cancel_scan(job_id):
        return jsonify({'error': 'Scan job already finished'}), 409

    return jsonify({'job_id': job_id, 'status': 'cancelled'})


@scans_bp.route('/apply', methods=['POST'])
def apply_moves():
    """
    Move the selected documents into their destination folders

    Each entry of 'moves' names a source_path and a destination_path folder.
    Failures are reported per file; the remaining moves still run. When
    source_dir and destination_root are both given the response also carries
    a fresh scan of the new state.
    """
    data = request.get_json(silent=True) or {}
    moves = data.get('moves')
    if not isinstance(moves, list) or not moves:
        return jsonify({'error': 'No moves provided'}), 400

    move_requests = []
    for entry in moves:
        if not isinstance(entry, dict) or not entry.get('source_path') or not entry.get('destination_path'):
            return jsonify({'error': 'Each move needs source_path and destination_path'}), 400
        move_requests.append(MoveRequest(Path(entry['source_path']), Path(entry['destination_path'])))

    report = move_module.move_service.apply(move_requests)
    response = report.to_dict()

    if data.get('source_dir') and data.get('destination_root'):
        rescan = scan_module.scan_service.run_scan(
            data['source_dir'], data['destination_root'], _threshold_from(data)
        )
        response['rescan'] = rescan.to_dict()

    return jsonify(response)


@scans_bp.route('/health', methods=['GET'])
def health():
    return jsonify({
        'status': 'healthy',
        'performance': get_performance_tracker().get_summary(),
        'config': config.get_summary(),
    })
