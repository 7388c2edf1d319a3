#!/usr/bin/env python3
import os
import sys
from importlib import import_module
from typing import Mapping, Tuple

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 7860

# web_ui.py sits next to the polly_ssml package, not inside it
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_address(environ: Mapping[str, str] = os.environ) -> Tuple[str, int]:
    """Host and port to bind, from HOST/PORT; an unusable PORT keeps the default."""
    port = environ.get("PORT", "")
    return (
        environ.get("HOST") or DEFAULT_HOST,
        int(port) if port.isdigit() else DEFAULT_PORT,
    )


def main():
    # Ensure repository root is importable so we can import `web_ui`
    if REPO_ROOT not in sys.path:
        sys.path.insert(0, REPO_ROOT)

    try:
        web_ui = import_module("web_ui")
    except ImportError as e:
        print("Could not import 'web_ui'.")
        print(f"Error: {e}")
        sys.exit(1)

    host, port = server_address()

    try:
        import uvicorn
    except ImportError:
        # Flask alone serves the HTTP routes but not the WebSocket endpoint
        print("uvicorn not installed; starting Flask UI only (no WebSocket)")
        print(f"Open your browser at http://{host}:{port}")
        web_ui.flask_app.run(debug=False, use_reloader=False, host=host, port=port)
        return

    print(f"Starting text-to-SSML server on http://{host}:{port} ...")
    uvicorn.run(web_ui.app, host=host, port=port)


if __name__ == "__main__":
    main()
