from typing import Optional

from flask import Flask, jsonify, render_template, request
from loguru import logger

from pwomatic.errors import GenerationError
from pwomatic.generator import Mode, PasswordPolicy, generate, generate_batch
from pwomatic.wordlist import WordList

MODE_LABELS = [
    (Mode.READABLE.value, "Readability"),
    (Mode.NORMAL.value, "Normal"),
    (Mode.RANDOM.value, "Random"),
]


def create_app(words: WordList, batch_size: int = 12, policy: Optional[PasswordPolicy] = None) -> Flask:
    app = Flask(__name__)
    app.config["BATCH_SIZE"] = batch_size

    @app.route('/')
    def home():
        # tiles start empty; the page fills them from /api/passwords on load
        return render_template(
            "index.html",
            tiles=app.config["BATCH_SIZE"],
            modes=MODE_LABELS,
        )

    @app.route('/api/passwords')
    def passwords_route():
        mode = request.args.get('mode') or Mode.NORMAL.value
        try:
            batch = generate_batch(mode, words, app.config["BATCH_SIZE"], policy=policy)
        except GenerationError as e:
            logger.error("batch generation failed for mode {}: {}", mode, e)
            return f"Could not generate password: {e}", 500, {"Content-Type": "text/plain; charset=utf-8"}
        return jsonify({'pwds': batch.passwords, 'fallback': batch.fallback})

    @app.route('/generate', methods=['POST'])
    def generate_route():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        mode = data.get('mode', Mode.NORMAL.value)
        try:
            result = generate(mode, words, policy=policy)
        except GenerationError as e:
            logger.error("generation failed for mode {}: {}", mode, e)
            return jsonify({'error': str(e)}), 500
        return jsonify({'password': result.password, 'fallback': result.fell_back})

    return app
