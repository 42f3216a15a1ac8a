from __future__ import annotations
from flask import Flask, request, jsonify, Response
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import os
import json
import logging
import time
from collections import deque, defaultdict
from pathlib import Path

from roi_services.api.logging_setup import setup_logging
from roi_services.config.env import get_logging_config, get_server_config, get_storage_config
from roi_services.exports.pdf import render_pdf
from roi_services.exports.reports import report_filename
from roi_services.simulation.engine import calculate_roi
from roi_services.simulation.inputs import ScenarioInput, validate_inputs, validate_scenario_name
from roi_services.storage.errors import StorageError
from roi_services.storage.leads import LeadStore, is_valid_email
from roi_services.storage.scenarios import ScenarioStore

log = logging.getLogger(__name__)

app = Flask(__name__)
CORS(
    app,
    origins=[get_server_config().frontend_url],
    supports_credentials=True,
    allow_headers=["Content-Type", "X-API-Key"],
    expose_headers=["Content-Disposition"],
)

OPENAPI_PATH = Path(__file__).with_name("openapi.json")

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return os.environ.get('API_KEY')


def _get_rate_limit() -> tuple[int, float]:
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None:
        n = int(os.environ.get('RATE_LIMIT_N', '5'))
    if w is None:
        w = float(os.environ.get('RATE_LIMIT_WINDOW_SEC', '60.0'))
    return int(n), float(w)


def _data_root() -> str:
    return app.config.get('DATA_ROOT') or get_storage_config().data_root


def _stores() -> tuple[ScenarioStore, LeadStore]:
    # One pair of stores per data root; tests point DATA_ROOT at temp dirs
    root = _data_root()
    cache = app.extensions.setdefault('roi_stores', {})
    if root not in cache:
        cache[root] = (ScenarioStore(root), LeadStore(root))
    return cache[root]


def scenario_store() -> ScenarioStore:
    return _stores()[0]


def lead_store() -> LeadStore:
    return _stores()[1]


_recent: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=100))


def _client_ip() -> str:
    xff = request.headers.get('X-Forwarded-For')
    if xff:
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            return jsonify({'success': False, 'error': 'unauthorized'}), 401
    return None


def _check_rate_limit(ip: str):
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    dq = _recent[ip]
    while dq and now - dq[0] > window:
        dq.popleft()
    if len(dq) >= n:
        retry = max(0.0, window - (now - dq[0]))
        log.warning("Rate limited %s on %s", ip, request.path, extra={'client_ip': ip, 'path': request.path})
        resp = jsonify({'success': False, 'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{retry:.2f}"
        return resp
    dq.append(now)
    return None


def _payload() -> dict:
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


def _bad_request(errors: list[str]):
    log.warning("Rejected %s: %s", request.path, "; ".join(errors), extra={'path': request.path})
    return jsonify({'success': False, 'errors': errors}), 400


@app.before_request
def _auth_and_rate_limit():
    # Only /api routes; health and CORS preflight stay open
    if not request.path.startswith('/api') or request.method == 'OPTIONS':
        return None
    if request.path == '/api/health':
        return None
    unauthorized = _check_api_key()
    if unauthorized is not None:
        return unauthorized
    # Report generation renders a PDF per call
    if request.method == 'POST' and request.path == '/api/report/generate':
        rl = _check_rate_limit(_client_ip())
        if rl is not None:
            return rl
    return None


@app.errorhandler(StorageError)
def _storage_error(e: StorageError):
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(Exception)
def _unhandled(e: Exception):
    if isinstance(e, HTTPException):
        return e
    log.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({'success': False, 'error': 'Internal server error'}), 500


@app.post('/api/simulate')
def post_simulate():
    payload = _payload()
    errors = validate_inputs(payload)
    if errors:
        return _bad_request(errors)
    results = calculate_roi(payload)
    return jsonify({'success': True, 'inputs': payload, 'results': results.to_dict()})


@app.post('/api/scenarios')
def post_scenario():
    payload = _payload()
    errors = validate_scenario_name(payload) + validate_inputs(payload)
    if errors:
        return _bad_request(errors)
    inputs = ScenarioInput.from_mapping(payload)
    results = calculate_roi(inputs)
    # DuplicateScenarioError -> 400 via _storage_error
    scenario = scenario_store().create(inputs, results)
    return jsonify({'success': True, 'scenario': scenario.to_dict()}), 201


@app.get('/api/scenarios')
def list_scenarios():
    return jsonify({'success': True, 'scenarios': [s.to_dict() for s in scenario_store().list()]})


@app.get('/api/scenarios/<sid>')
def get_scenario(sid: str):
    s = scenario_store().get(sid)
    if not s:
        return jsonify({'success': False, 'error': 'Scenario not found'}), 404
    return jsonify({'success': True, 'scenario': s.to_dict()})


@app.delete('/api/scenarios/<sid>')
def delete_scenario(sid: str):
    if not scenario_store().delete(sid):
        return jsonify({'success': False, 'error': 'Scenario not found'}), 404
    return jsonify({'success': True, 'message': 'Scenario deleted successfully'})


@app.post('/api/report/generate')
def generate_report():
    payload = _payload()
    email = payload.get('email')
    sid = payload.get('scenario_id')
    if not email or not sid:
        return jsonify({'success': False, 'error': 'Email and scenario_id are required'}), 400
    if not is_valid_email(email):
        return jsonify({'success': False, 'error': 'Invalid email format'}), 400
    s = scenario_store().get(sid)
    if not s:
        return jsonify({'success': False, 'error': 'Scenario not found'}), 404

    lead_store().record(email, s.id)
    doc = s.to_dict()
    body = render_pdf(doc)
    log.info("Generated report for scenario %s", s.id, extra={'scenario_id': s.id})
    return Response(body, mimetype='application/pdf', headers={
        'Content-Disposition': f'attachment; filename="{report_filename(doc)}"'
    })


@app.get('/api/health')
def health():
    return jsonify({'success': True, 'message': 'Server is running'})


@app.get('/openapi.json')
def get_openapi():
    try:
        spec = json.loads(OPENAPI_PATH.read_text())
    except (OSError, ValueError):
        return jsonify({'error': 'openapi_not_found'}), 404
    return jsonify(spec)


if __name__ == '__main__':
    lc = get_logging_config()
    setup_logging(lc.level, lc.fmt)
    sc = get_server_config()
    app.run(host=sc.host, port=sc.port)
