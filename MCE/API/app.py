# =============================================================================
# MCE/API/app.py — Flask HTTP adaptor
# =============================================================================
#
# Thin layer between HTTP and the core.  It owns exactly three concerns:
#
#   1. Session identity: Flask's signed cookie carries an opaque random id
#      (session["sid"]).  The solution itself stays server-side in the
#      SolutionStore; the cookie is signed, not encrypted, so it must never
#      hold note names.
#   2. Routing: GET /api/challenge, POST /api/verify, GET /api/health.
#   3. Response shape: WAV or JSON out, generic JSON on any failure.
#
# Endpoints:
#   GET  /api/challenge   audio variant : 200 audio/wav  (Cache-Control: no-store)
#                         notes variant : 200 {"challenge": [...]}
#   POST /api/verify      {"userAnswer": [...]} -> {"success": bool, "message": str}
#   GET  /api/health      {"status": "ok"}
# =============================================================================

from __future__ import annotations
import os
import secrets

import numpy as np
from flask import Flask, Response, jsonify, request, send_from_directory, session
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from MCE.NMM.constants import WAV_MIMETYPE, MSG_ERROR
from MCE.CSM import (
    ChallengeGenerator, MemorySolutionStore, SolutionStore, Verifier,
    DELIVERY_AUDIO,
)
from .config import ServerConfig

SESSION_KEY = "sid"


def session_id() -> str:
    """Return the caller's session id, minting one on first contact."""
    sid = session.get(SESSION_KEY)
    if not sid:
        sid = secrets.token_urlsafe(24)
        session[SESSION_KEY] = sid
    return sid


def create_app(
    config: ServerConfig | None = None,
    store:  SolutionStore | None = None,
    rng:    np.random.Generator | None = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Deployment settings.  Read from the environment when None.
        store:  Solution store.  A MemorySolutionStore with config.challenge_ttl
                is created when None.
        rng:    Random source for notes and noise (seed it in tests).
    """
    cfg = config if config is not None else ServerConfig.from_env()

    static_dir = os.path.abspath(cfg.static_dir) if cfg.static_dir else None
    app = Flask(__name__, static_folder=static_dir, static_url_path="" if static_dir else None)

    app.config.update(
        SECRET_KEY=cfg.session_secret,
        SESSION_COOKIE_SECURE=cfg.production,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
    )
    app.logger.setLevel(cfg.log_level)

    if cfg.trust_proxy:
        # One hop, as with a managed host's TLS-terminating proxy.
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    store = store if store is not None else MemorySolutionStore(ttl=cfg.challenge_ttl)
    generator = ChallengeGenerator(
        store,
        rng=rng,
        length=cfg.challenge_length,
        reuse_pending=cfg.reuse_pending,
    )
    verifier = Verifier(store)

    app.extensions["mce"] = {
        "config": cfg, "store": store, "generator": generator, "verifier": verifier,
    }

    # ── Routes ───────────────────────────────────────────────────────────────

    @app.route("/api/challenge", methods=["GET"])
    def challenge():
        chal = generator.create_challenge(session_id())

        if cfg.delivery == DELIVERY_AUDIO:
            wav_bytes = generator.render_audio(chal)
            resp = Response(wav_bytes, mimetype=WAV_MIMETYPE)
            resp.headers["Cache-Control"] = "no-store"
            return resp
        return jsonify(generator.notes_payload(chal))

    @app.route("/api/verify", methods=["POST"])
    def verify():
        body = request.get_json(silent=True)
        answer = body.get("userAnswer") if isinstance(body, dict) else None
        result = verifier.verify(session_id(), answer)
        return jsonify(result.to_json())

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    if static_dir:
        @app.route("/")
        def index():
            return send_from_directory(static_dir, "index.html")

    # ── Errors ───────────────────────────────────────────────────────────────

    @app.errorhandler(Exception)
    def handle_error(exc):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "message": MSG_ERROR}), 500

    app.logger.info(
        "musical captcha ready: delivery=%s reuse_pending=%s ttl=%s",
        cfg.delivery, cfg.reuse_pending, cfg.challenge_ttl,
    )
    return app
