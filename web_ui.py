#!/usr/bin/env python3
"""
Web UI for the text-to-SSML converter, served via FastAPI with a WebSocket
endpoint for live conversion while typing. The Flask UI is mounted under
FastAPI to keep templates and routes in one place.
"""
import json
import os
from typing import Dict, Tuple

from flask import Flask, render_template, request, jsonify, Response

# FastAPI + WebSocket server
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.wsgi import WSGIMiddleware

from polly_ssml.errors import MalformedTagError
from polly_ssml.ssml_parser import convert
from polly_ssml.ssml_constants import CloseTag, OpenTag
from polly_ssml.well_formed import check_well_formed

MAX_TEXT_LENGTH = int(os.environ.get("POLLY_SSML_MAX_TEXT_LENGTH", "100000"))
DEFAULT_LANG = os.environ.get("POLLY_SSML_LANG") or None
DEFAULT_ONLANGFAILURE = os.environ.get("POLLY_SSML_ONLANGFAILURE") or None

SELF_CLOSING_TAGS = sorted(t.value for t in OpenTag if CloseTag.parse(t.value) is None)
WRAPPING_TAGS = sorted(t.value for t in CloseTag)


def convert_payload(data: Dict) -> Tuple[Dict, int]:
    """Run one conversion request; returns (response body, HTTP status)."""
    text = data.get('text', '')
    if not isinstance(text, str):
        return {'error': 'Field "text" must be a string'}, 400
    if len(text) > MAX_TEXT_LENGTH:
        return {'error': f'Text too long. Maximum {MAX_TEXT_LENGTH} characters.'}, 400

    for key in ('lang', 'onlangfailure'):
        if data.get(key) is not None and not isinstance(data[key], str):
            return {'error': f'Field "{key}" must be a string'}, 400

    lang = data.get('lang') or DEFAULT_LANG
    onlangfailure = data.get('onlangfailure') or DEFAULT_ONLANGFAILURE
    try:
        ssml = convert(text, lang=lang, onlangfailure=onlangfailure)
    except MalformedTagError as e:
        return {'error': str(e), 'remainder': e.remainder}, 422

    problem = check_well_formed(ssml)
    return {'ssml': ssml, 'well_formed': problem is None, 'problem': problem}, 200


# Flask app (mounted under FastAPI)
flask_app = Flask(__name__)


@flask_app.route('/favicon.ico')
def favicon():
    return Response(status=204)


@flask_app.route('/')
def index():
    return render_template(
        'index.html',
        wrapping_tags=WRAPPING_TAGS,
        self_closing_tags=SELF_CLOSING_TAGS,
        max_length=MAX_TEXT_LENGTH,
    )


@flask_app.route('/convert', methods=['POST'])
def convert_text():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    body, status = convert_payload(data)
    return jsonify(body), status


# -----------------------------
# FastAPI app with WebSocket API
# -----------------------------

# Create FastAPI app and mount Flask under /flask
app = FastAPI()

# Mount Flask UI under /flask
app.mount("/flask", WSGIMiddleware(flask_app))


@app.get("/")
async def root_redirect():
    # Redirect root to Flask UI
    return RedirectResponse(url="/flask/")


@app.post("/convert")
async def convert_endpoint(req: Request):
    try:
        data = await req.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    body, status = convert_payload(data)
    return JSONResponse(body, status_code=status)


@app.websocket("/ws/convert")
async def ws_convert(websocket: WebSocket):
    """Convert every message received; plain text or a JSON request object."""
    await websocket.accept()
    try:
        while True:
            message = await websocket.receive_text()
            try:
                data = json.loads(message)
            except ValueError:
                data = None
            if not isinstance(data, dict):
                data = {'text': message}
            body, status = convert_payload(data)
            body['status'] = status
            await websocket.send_json(body)
    except WebSocketDisconnect:
        return


if __name__ == '__main__':
    # Prefer running under uvicorn for WebSocket support
    try:
        import uvicorn
        print("Starting text-to-SSML FastAPI server...")
        print("Open your browser at http://localhost:7860")
        uvicorn.run(app, host='0.0.0.0', port=7860)
    except ImportError:
        # Fallback to Flask-only run (no WebSocket)
        print("uvicorn not installed; starting Flask UI only (no WebSocket)")
        print("Open your browser at http://localhost:5000")
        flask_app.run(debug=False, use_reloader=False, host='0.0.0.0', port=5000)
