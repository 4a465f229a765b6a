"""
Web Interface for DOM Diff
Local page server for manual comparisons and a JSON diff endpoint.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, Response, jsonify, request
from werkzeug.serving import make_server

from core.config import Settings
from core.diff_analyzer import DomDiffAnalyzer
from core.dom_node import node_from_dict
from comparator.structure_diff import compare_trees
from utils.file_utils import read_file_content

logger = logging.getLogger(__name__)

PAGES_DIR = Path(__file__).parent / 'pages'


def create_page_app(page_path: Path) -> Flask:
    """Serve a single HTML file for every request path."""
    app = Flask(__name__, static_folder=None)

    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def page(path):
        return Response(read_file_content(page_path), content_type='text/html; charset=utf-8')

    return app


def create_app(analyzer: Optional[DomDiffAnalyzer] = None) -> Flask:
    app = Flask(__name__)
    app.json.ensure_ascii = False
    diff_analyzer = analyzer or DomDiffAnalyzer()

    @app.route('/diff', methods=['POST'])
    def diff():
        """Diff two HTML strings or two pre-parsed trees."""
        try:
            payload = request.get_json(silent=True) or {}
            if isinstance(payload.get('html1'), str) and isinstance(payload.get('html2'), str):
                result = diff_analyzer.compare_html(payload['html1'], payload['html2'])
            elif isinstance(payload.get('tree1'), dict) and isinstance(payload.get('tree2'), dict):
                result = compare_trees(node_from_dict(payload['tree1']), node_from_dict(payload['tree2']))
            else:
                return jsonify({'error': 'Both html1 and html2 (or tree1 and tree2) are required'}), 400
            return jsonify(result.to_dict())
        except Exception as e:
            logger.error(f"Error computing diff: {str(e)}", exc_info=True)
            return jsonify({'error': str(e)}), 500

    return app


def run_page_servers(page1: Path, page2: Path, port1: int, port2: int, host: str = '127.0.0.1') -> None:
    """Serve two pages on two ports until interrupted."""
    servers = [
        make_server(host, port1, create_page_app(page1), threaded=True),
        make_server(host, port2, create_page_app(page2), threaded=True),
    ]
    threads: List[threading.Thread] = []
    for server in servers:
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        threads.append(thread)

    print(f"Server 1 ({page1.name}) running at http://localhost:{port1}")
    print(f"Server 2 ({page2.name}) running at http://localhost:{port2}")
    print("\nPress Ctrl+C to stop servers")
    try:
        for thread in threads:
            thread.join()
    except KeyboardInterrupt:
        pass
    finally:
        for server in servers:
            server.shutdown()


if __name__ == '__main__':
    settings = Settings.from_env()
    logging.basicConfig(level=getattr(logging, (settings.log_level or 'INFO').upper(), logging.INFO))
    if len(sys.argv) > 1 and sys.argv[1] == 'api':
        create_app().run(host='0.0.0.0', port=settings.api_port)
    else:
        run_page_servers(PAGES_DIR / 'v1.html', PAGES_DIR / 'v2.html', settings.page_port1, settings.page_port2)
