"""
Playground Web API
Generates utility CSS for posted markup or class lists.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.css_reader import count_rules
from core.html_scanner import extract_classes
from core.stylesheet_assembler import StylesheetAssembler
from core.token_store import TokenTable
from core.utility_resolver import UtilityResolver
from tailwind.config_reader import load_and_merge_tokens

logger = logging.getLogger(__name__)


def create_app(tokens: Optional[TokenTable] = None, utilities: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the playground app; tokens default to tokens.json merged with the config file."""
    if tokens is None:
        loaded = load_and_merge_tokens()
        tokens = loaded.tokens
        if utilities is None:
            utilities = loaded.config.get('utilities')
        logger.info(f"Playground tokens {loaded.describe()}")

    app = Flask(__name__)
    resolver = UtilityResolver(tokens, utilities=utilities)
    assembler = StylesheetAssembler(resolver)

    @app.route('/api/tokens')
    def get_tokens():
        """Return the effective token table."""
        return jsonify(tokens.to_dict())

    @app.route('/api/generate', methods=['POST'])
    def generate():
        """Generate CSS from {"html": ...} or {"classes": [...]}."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400

        if isinstance(payload.get('classes'), list):
            # Same contract as the file scanner: unique names, first-seen order
            class_names = list(dict.fromkeys(c for c in payload['classes'] if isinstance(c, str) and c))
        elif isinstance(payload.get('html'), str):
            filetype = payload.get('filetype')
            if not isinstance(filetype, str):
                filetype = 'html'
            class_names = list(dict.fromkeys(extract_classes(payload['html'], filetype)))
        else:
            return jsonify({'error': 'Provide "html" markup or a "classes" list'}), 400

        result = assembler.build(class_names)
        return jsonify({
            'css': result.css,
            'rule_count': count_rules(result.css),
            'emitted': result.emitted,
            'skipped': result.skipped,
        })

    @app.route('/api/resolve', methods=['POST'])
    def resolve_class():
        """Resolve a single class name."""
        payload = request.get_json(silent=True)
        class_name = payload.get('class') if isinstance(payload, dict) else None
        if not isinstance(class_name, str):
            return jsonify({'error': 'Provide a "class" string'}), 400
        return jsonify({'class': class_name, 'rule': resolver.css_rule(class_name)})

    return app


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    create_app().run(host="0.0.0.0", port=port, debug=True)
